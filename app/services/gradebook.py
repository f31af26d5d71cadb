"""
Grade entry and final-grade computation for a course's instructor.

Viewing a gradebook is split in two steps: ``ensure_grade_rows`` creates the
missing blank grades for an assignment, ``assemble_gradebook`` only reads.
The ``GET /gradebook/{id}`` route resolves the assignment once and runs both.
"""

import logging
from typing import Iterable, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import BadRequestError, NotFoundError
from app.core.permissions import require_instructor
from app.models.assignment import Assignment
from app.models.assignment_grade import AssignmentGrade
from app.models.course import Course
from app.schemas.final_grade import FinalGradeDTO
from app.schemas.grade import GradeDTO, GradeUpdate
from app.services.registration import RegistrationService

logger = logging.getLogger(__name__)

# inclusive lower bounds, highest first
LETTER_GRADE_THRESHOLDS = (
    (90.0, "A"),
    (80.0, "B"),
    (70.0, "C"),
    (60.0, "D"),
)


def letter_grade(average: float) -> str:
    for lower_bound, letter in LETTER_GRADE_THRESHOLDS:
        if average >= lower_bound:
            return letter
    return "F"


def student_average(scores: Iterable[Optional[float]]) -> float:
    """Mean of the graded scores; 0 when nothing is graded."""
    graded = [s for s in scores if s is not None]
    if not graded:
        return 0.0
    return sum(graded) / len(graded)


def check_assignment(db: Session, assignment_id: int, requester_email: str) -> Assignment:
    assignment = db.query(Assignment).filter(Assignment.id == assignment_id).first()
    if not assignment:
        raise BadRequestError(f"Assignment not found. {assignment_id}")
    require_instructor(assignment.course, requester_email)
    return assignment


def _add_missing_grades(db: Session, assignment: Assignment) -> int:
    graded_enrollments = {
        enrollment_id
        for (enrollment_id,) in db.query(AssignmentGrade.enrollment_id).filter(
            AssignmentGrade.assignment_id == assignment.id
        )
    }

    created = 0
    for enrollment in assignment.course.enrollments:
        if enrollment.id in graded_enrollments:
            continue
        db.add(AssignmentGrade(assignment_id=assignment.id, enrollment_id=enrollment.id))
        created += 1
    return created


def ensure_grade_rows(db: Session, assignment: Assignment) -> int:
    """
    Create a blank grade for every enrolled student that lacks one.

    If another request inserts some of the same rows first, the unique
    constraint rejects this batch; it is rolled back and the missing rows are
    read again once.
    """
    attempts = 2
    for attempt in range(1, attempts + 1):
        created = _add_missing_grades(db, assignment)
        if not created:
            return 0
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            if attempt == attempts:
                raise
            logger.info("Blank grades for assignment %s were created concurrently; re-reading", assignment.id)
            continue
        except Exception:
            db.rollback()
            raise

        logger.info("Created %d blank grade(s) for assignment %s", created, assignment.id)
        return created
    return 0


def assemble_gradebook(db: Session, assignment: Assignment) -> list[GradeDTO]:
    """One row per enrollment that has a grade; no writes."""
    grades_by_enrollment = {
        g.enrollment_id: g
        for g in db.query(AssignmentGrade).filter(AssignmentGrade.assignment_id == assignment.id)
    }

    rows: list[GradeDTO] = []
    for enrollment in assignment.course.enrollments:
        grade = grades_by_enrollment.get(enrollment.id)
        if grade is None:
            continue
        rows.append(
            GradeDTO(
                assignment_grade_id=grade.id,
                student_name=enrollment.student_name,
                student_email=enrollment.student_email,
                grade=grade.score,
            )
        )
    return rows


def get_gradebook(db: Session, assignment_id: int, requester_email: str) -> list[GradeDTO]:
    assignment = check_assignment(db, assignment_id, requester_email)
    return assemble_gradebook(db, assignment)


def update_gradebook(
    db: Session,
    assignment_id: int,
    requester_email: str,
    updates: Sequence[GradeUpdate],
) -> None:
    """Apply all score updates or none of them."""
    assignment = check_assignment(db, assignment_id, requester_email)

    try:
        for update in updates:
            grade = (
                db.query(AssignmentGrade)
                .filter(AssignmentGrade.id == update.assignment_grade_id)
                .first()
            )
            # a grade of another assignment is treated as unknown here
            if grade is None or grade.assignment_id != assignment.id:
                raise BadRequestError(f"Invalid grade primary key. {update.assignment_grade_id}")
            logger.debug("grade %s: %s -> %s", grade.id, grade.score, update.grade)
            grade.score = update.grade
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Updated %d grade(s) for assignment %s", len(updates), assignment.id)


def calc_final_grades(
    db: Session,
    course_id: int,
    requester_email: str,
    registration: RegistrationService,
) -> list[FinalGradeDTO]:
    course = db.query(Course).filter(Course.id == course_id).first()
    if not course:
        raise NotFoundError(f"Course not found. {course_id}")
    require_instructor(course, requester_email)

    grades: list[FinalGradeDTO] = []
    for enrollment in course.enrollments:
        average = student_average(g.score for g in enrollment.assignment_grades)
        grades.append(
            FinalGradeDTO(
                student_email=enrollment.student_email,
                student_name=enrollment.student_name,
                letter_grade=letter_grade(average),
                course_id=course.id,
            )
        )

    logger.info("Computed %d final grade(s) for course %s", len(grades), course.id)
    registration.send_final_grades(course.id, grades)
    return grades
