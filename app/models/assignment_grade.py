from sqlalchemy import Column, Float, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class AssignmentGrade(Base):
    __tablename__ = "assignment_grades"

    id = Column(Integer, primary_key=True, index=True)

    assignment_id = Column(Integer, ForeignKey("assignments.id", ondelete="CASCADE"), nullable=False, index=True)
    enrollment_id = Column(Integer, ForeignKey("enrollments.id", ondelete="CASCADE"), nullable=False, index=True)

    # null until graded
    score = Column(Float, nullable=True)

    __table_args__ = (
        UniqueConstraint("assignment_id", "enrollment_id", name="uq_assignment_grade_assignment_enrollment"),
    )

    assignment = relationship("Assignment", back_populates="grades")
    enrollment = relationship("Enrollment", back_populates="assignment_grades")
