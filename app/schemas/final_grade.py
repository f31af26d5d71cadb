from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class FinalGradeDTO(BaseModel):
    student_email: str
    student_name: str
    letter_grade: str
    course_id: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True
