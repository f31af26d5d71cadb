import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.core import config
from app.core.errors import BadRequestError, NotFoundError
from app.core.permissions import require_instructor
from app.models.assignment import Assignment
from app.models.course import Course
from app.schemas.assignment import AssignmentDTO

logger = logging.getLogger(__name__)


def _to_dto(assignment: Assignment) -> AssignmentDTO:
    return AssignmentDTO(
        id=assignment.id,
        assignment_name=assignment.name,
        due_date=assignment.due_date,
        course_title=assignment.course.title,
        course_id=assignment.course_id,
    )


def _ensure_assignment_exists(db: Session, assignment_id: int) -> Assignment:
    assignment = db.query(Assignment).filter(Assignment.id == assignment_id).first()
    if not assignment:
        raise NotFoundError(f"Invalid assignment primary key {assignment_id}")
    return assignment


def check_course_title(course: Course, course_title: Optional[str], rule: Optional[str] = None) -> None:
    """
    Apply the configured course title rule to a caller-supplied title.

    The default ``reject_match`` keeps the long-standing behaviour of refusing a
    title that equals the course title. It is probably inverted; switch to
    ``require_match`` once the product owner confirms.
    """
    rule = rule or config.COURSE_TITLE_RULE
    if rule not in config.TITLE_RULES:
        raise ValueError(f"Unknown course title rule {rule!r}")

    if rule == "reject_match":
        rejected = course.title == course_title
    elif rule == "require_match":
        rejected = course.title != course_title
    else:
        rejected = False

    if rejected:
        raise BadRequestError(
            f"Invalid course title {course_title} for course primary key {course.id}"
        )


def check_course(db: Session, course_id: int, course_title: Optional[str]) -> Course:
    course = db.query(Course).filter(Course.id == course_id).first()
    if not course:
        raise NotFoundError(f"Invalid course primary key {course_id}")
    check_course_title(course, course_title)
    return course


def list_assignments_for_instructor(db: Session, instructor_email: str) -> list[AssignmentDTO]:
    assignments = (
        db.query(Assignment)
        .join(Course, Course.id == Assignment.course_id)
        .filter(Course.instructor == instructor_email)
        .order_by(Assignment.due_date.asc(), Assignment.id.asc())
        .all()
    )
    return [_to_dto(a) for a in assignments]


def get_assignment(db: Session, assignment_id: int) -> AssignmentDTO:
    return _to_dto(_ensure_assignment_exists(db, assignment_id))


def create_assignment(db: Session, payload: AssignmentDTO, requester_email: str) -> int:
    course = check_course(db, payload.course_id, payload.course_title)

    assignment = Assignment(
        name=payload.assignment_name,
        due_date=payload.due_date,
        course_id=course.id,
    )
    db.add(assignment)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(assignment)

    logger.info("Created assignment %s in course %s for %s", assignment.id, course.id, requester_email)
    return assignment.id


def update_assignment(
    db: Session,
    assignment_id: int,
    payload: AssignmentDTO,
    requester_email: str,
) -> AssignmentDTO:
    assignment = _ensure_assignment_exists(db, assignment_id)
    require_instructor(assignment.course, requester_email)

    course = check_course(db, payload.course_id, payload.course_title)
    # must also own the target course
    require_instructor(course, requester_email)

    if course.id != assignment.course_id and assignment.grades:
        raise BadRequestError(
            f"Assignment {assignment.id} has grades and cannot move to course {course.id}"
        )

    assignment.name = payload.assignment_name
    assignment.due_date = payload.due_date
    assignment.course = course
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(assignment)

    logger.info("Updated assignment %s", assignment.id)
    return _to_dto(assignment)


def delete_assignment(db: Session, assignment_id: int, requester_email: str) -> None:
    assignment = _ensure_assignment_exists(db, assignment_id)
    require_instructor(assignment.course, requester_email)

    db.delete(assignment)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Deleted assignment %s and its grades", assignment_id)
