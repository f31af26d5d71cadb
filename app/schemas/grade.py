from typing import Optional

from pydantic import BaseModel, FiniteFloat
from pydantic.alias_generators import to_camel


class GradeDTO(BaseModel):
    assignment_grade_id: int
    student_name: str
    student_email: str
    grade: Optional[float] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class GradeUpdate(BaseModel):
    """One entry of a gradebook PUT; other GradeDTO fields are accepted and ignored."""

    assignment_grade_id: int
    grade: Optional[FiniteFloat] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
