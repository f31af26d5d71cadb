from datetime import date
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class AssignmentDTO(BaseModel):
    id: Optional[int] = None
    assignment_name: str
    due_date: date
    course_title: Optional[str] = None
    course_id: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True
