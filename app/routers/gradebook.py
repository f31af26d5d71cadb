from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.current_user import get_current_user
from app.core.deps import get_db
from app.models.user import User
from app.schemas.grade import GradeDTO, GradeUpdate
from app.services import gradebook as gradebook_service

router = APIRouter()


@router.get(
    "/gradebook/{assignment_id}",
    response_model=list[GradeDTO],
    responses={
        400: {"description": "Unknown assignment"},
        401: {"description": "Not the course instructor"},
    },
)
def get_gradebook(
    assignment_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    """
    Current grades of every enrolled student for an assignment.

    Students without a grade get a blank one created first, so every
    enrollment has a row (and a grade id to PUT against).
    """
    assignment = gradebook_service.check_assignment(db, assignment_id, me.email)
    gradebook_service.ensure_grade_rows(db, assignment)
    return gradebook_service.assemble_gradebook(db, assignment)


@router.put(
    "/gradebook/{assignment_id}",
    responses={
        400: {"description": "Unknown assignment or grade id"},
        401: {"description": "Not the course instructor"},
    },
)
def update_gradebook(
    assignment_id: int,
    grades: list[GradeUpdate],
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    gradebook_service.update_gradebook(db, assignment_id, me.email, grades)
