"""
Subscriber schemas for API.
"""

from datetime import datetime

from ninja import Schema
from pydantic import ConfigDict, Field


class EmailIn(Schema):
    email: str | None = None


class SubscriberOut(Schema):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    email: str
    status: str
    subscribedAt: datetime = Field(validation_alias="subscribed_at")


class SubscriberMessageOut(Schema):
    success: bool = True
    message: str
    data: SubscriberOut | None = None
