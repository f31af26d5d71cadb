from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.current_user import get_current_user
from app.core.deps import get_db
from app.models.user import User
from app.schemas.assignment import AssignmentDTO
from app.services import assignments as assignment_service

router = APIRouter()


@router.get("/assignment", response_model=list[AssignmentDTO])
def list_assignments(
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    return assignment_service.list_assignments_for_instructor(db, me.email)


@router.get(
    "/assignment/{assignment_id}",
    response_model=AssignmentDTO,
    responses={404: {"description": "Unknown assignment"}},
)
def get_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    return assignment_service.get_assignment(db, assignment_id)


@router.post(
    "/assignment",
    response_model=int,
    responses={
        400: {"description": "Course title rejected"},
        404: {"description": "Unknown course"},
    },
)
def create_assignment(
    payload: AssignmentDTO,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    return assignment_service.create_assignment(db, payload, me.email)


@router.put(
    "/assignment/{assignment_id}",
    response_model=AssignmentDTO,
    responses={
        400: {"description": "Course title rejected"},
        401: {"description": "Not the course instructor"},
        404: {"description": "Unknown assignment or course"},
    },
)
def update_assignment(
    assignment_id: int,
    payload: AssignmentDTO,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    return assignment_service.update_assignment(db, assignment_id, payload, me.email)


@router.delete(
    "/assignment/{assignment_id}",
    responses={
        401: {"description": "Not the course instructor"},
        404: {"description": "Unknown assignment"},
    },
)
def delete_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    assignment_service.delete_assignment(db, assignment_id, me.email)
