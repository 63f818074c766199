from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Student(BaseModel):
    """One student record, as stored in the JSON document."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(gt=0, alias="studentId")
    name: str
    dob: str
    contact: str
    # Older documents used "photo" or "image" for the same field
    avatar: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("avatar", "photo", "image"),
    )
