from sqlalchemy import Column, Date, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class Assignment(Base):
    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    due_date = Column(Date, nullable=False)

    course = relationship("Course", back_populates="assignments")

    grades = relationship("AssignmentGrade", back_populates="assignment", cascade="all, delete-orphan")
