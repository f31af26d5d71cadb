from app.core.errors import UnauthorizedError
from app.models.course import Course


def require_instructor(course: Course, requester_email: str) -> Course:
    """Return ``course`` if ``requester_email`` is its instructor."""
    if course.instructor != requester_email:
        raise UnauthorizedError("Not Authorized. Only the course instructor may do this")
    return course
