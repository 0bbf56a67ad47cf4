"""
Contact schemas for API.
"""

import re
from datetime import datetime

from ninja import Schema
from pydantic import ConfigDict, Field, field_validator

from .models import ContactBudget, ContactTimeline

EMAIL_REGEX = re.compile(r"^\S+@\S+$")


class ContactIn(Schema):
    """Contact form input."""

    name: str
    email: str
    subject: str
    message: str
    company: str | None = None
    phone: str | None = None
    budget: str | None = None
    timeline: str | None = None

    @field_validator("name", "subject", "message")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("This field is required")
        return value

    @field_validator("email")
    @classmethod
    def valid_email(cls, value: str) -> str:
        value = value.strip().lower()
        if not EMAIL_REGEX.match(value):
            raise ValueError("Please enter a valid email")
        return value

    @field_validator("budget")
    @classmethod
    def valid_budget(cls, value: str | None) -> str:
        value = (value or "").strip()
        if value and value not in ContactBudget.values:
            raise ValueError(f"Budget must be one of: {', '.join(ContactBudget.values)}")
        return value

    @field_validator("timeline")
    @classmethod
    def valid_timeline(cls, value: str | None) -> str:
        value = (value or "").strip()
        if value and value not in ContactTimeline.values:
            raise ValueError(f"Timeline must be one of: {', '.join(ContactTimeline.values)}")
        return value


class ContactOut(Schema):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    name: str
    email: str
    company: str = ""
    phone: str = ""
    subject: str
    message: str
    budget: str = ""
    timeline: str = ""
    status: str
    createdAt: datetime = Field(validation_alias="created_at")
    updatedAt: datetime = Field(validation_alias="updated_at")


class ContactMessageOut(Schema):
    success: bool = True
    message: str
    data: ContactOut | None = None


class ContactStatusIn(Schema):
    status: str
