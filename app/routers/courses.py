from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.current_user import get_current_user
from app.core.deps import get_db, get_registration_service
from app.models.user import User
from app.services import gradebook as gradebook_service
from app.services.registration import RegistrationService

router = APIRouter()


@router.post(
    "/course/{course_id}/finalgrades",
    responses={
        401: {"description": "Not the course instructor"},
        404: {"description": "Unknown course"},
        502: {"description": "Registration service failed"},
    },
)
def calc_final_grades(
    course_id: int,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
    registration: RegistrationService = Depends(get_registration_service),
):
    """Average each student's graded scores, convert to letters and send them to registration."""
    gradebook_service.calc_final_grades(db, course_id, me.email, registration)
