from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.core.exceptions import StudentValidationError


class StudentForm(BaseModel):
    """Fields submitted by the add/edit forms."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    dob: str = Field(min_length=1)
    contact: str = Field(min_length=1)


def validate_student_form(
    name: Optional[str],
    dob: Optional[str],
    contact: Optional[str],
) -> StudentForm:
    """
    Build a StudentForm from raw form values.

    Raises:
        StudentValidationError: one entry per missing field
    """
    try:
        return StudentForm(name=name or "", dob=dob or "", contact=contact or "")
    except ValidationError as e:
        details: Dict[str, str] = {}
        for error in e.errors():
            field = ".".join(str(x) for x in error["loc"])
            details[field] = "This field is required"
        raise StudentValidationError(details=details) from e
