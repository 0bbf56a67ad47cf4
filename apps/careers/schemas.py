"""
Career schemas for API.
"""

import re
from datetime import datetime

from ninja import Schema
from pydantic import ConfigDict, Field, field_validator

EMAIL_REGEX = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,})+$")


class CareerIn(Schema):
    """Career application form fields."""

    name: str
    email: str
    phone: str
    position: str
    experience: str
    currentCompany: str
    expectedSalary: str
    noticePeriod: str
    coverLetter: str | None = None

    @field_validator(
        "name", "phone", "position", "experience", "currentCompany", "expectedSalary", "noticePeriod"
    )
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("This field is required")
        return value

    @field_validator("email")
    @classmethod
    def valid_email(cls, value: str) -> str:
        value = value.strip()
        if not EMAIL_REGEX.match(value):
            raise ValueError("Please enter a valid email")
        return value


class ResumeOut(Schema):
    filename: str | None = None
    contentType: str | None = None


class CareerOut(Schema):
    """Career application output. Resume bytes are never included."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    name: str
    email: str
    phone: str
    position: str
    experience: str
    currentCompany: str = Field(validation_alias="current_company")
    expectedSalary: str = Field(validation_alias="expected_salary")
    noticePeriod: str = Field(validation_alias="notice_period")
    coverLetter: str | None = Field(validation_alias="cover_letter", default=None)
    resume: ResumeOut | None = None
    status: str
    createdAt: datetime = Field(validation_alias="created_at")
    updatedAt: datetime = Field(validation_alias="updated_at")

    @staticmethod
    def resolve_resume(obj) -> dict | None:
        if not obj.has_resume:
            return None
        return {"filename": obj.resume_filename, "contentType": obj.resume_content_type}


class CareerStatusIn(Schema):
    status: str


class CareerMessageOut(Schema):
    success: bool = True
    message: str
