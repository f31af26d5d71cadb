from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class Enrollment(Base):
    __tablename__ = "enrollments"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(
        Integer,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_name = Column(String(255), nullable=False)
    student_email = Column(String(255), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint(
            "course_id", "student_email", name="uq_enrollments_course_student"
        ),
    )

    course = relationship("Course", back_populates="enrollments")
    assignment_grades = relationship(
        "AssignmentGrade", back_populates="enrollment", cascade="all, delete-orphan"
    )
