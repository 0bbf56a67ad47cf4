"""
Newsletter subscription endpoints.
"""

import logging
import re

from django.db import IntegrityError, transaction
from django.http import HttpRequest
from ninja import Router
from ninja.errors import HttpError

from utils.ids import is_object_id
from .models import Subscriber, SubscriberStatus
from .schemas import EmailIn, SubscriberMessageOut, SubscriberOut

logger = logging.getLogger(__name__)

router = Router()

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def clean_email(raw: str | None) -> str:
    email = (raw or "").strip().lower()
    if not email:
        raise HttpError(400, "Email is required")
    if not EMAIL_REGEX.match(email):
        raise HttpError(400, "Please provide a valid email address")
    return email


@router.post("/subscribe", response={201: SubscriberMessageOut, 200: SubscriberMessageOut})
def subscribe(request: HttpRequest, data: EmailIn):
    """Subscribe an address, re-activating it if it had unsubscribed."""
    email = clean_email(data.email)

    subscriber = Subscriber.objects.filter(email=email).first()
    if subscriber:
        if subscriber.status == SubscriberStatus.ACTIVE:
            raise HttpError(400, "Email already subscribed")
        subscriber.status = SubscriberStatus.ACTIVE
        subscriber.save(update_fields=["status", "updated_at"])
        logger.info(f"[Subscribers] Re-activated {email}")
        return 200, {
            "success": True,
            "message": "Successfully subscribed to newsletter",
            "data": SubscriberOut.from_orm(subscriber),
        }

    try:
        with transaction.atomic():
            subscriber = Subscriber.objects.create(email=email)
    except IntegrityError:
        raise HttpError(400, "Email already subscribed")

    logger.info(f"[Subscribers] Subscribed {email}")
    return 201, {
        "success": True,
        "message": "Successfully subscribed to newsletter",
        "data": SubscriberOut.from_orm(subscriber),
    }


@router.post("/unsubscribe", response=SubscriberMessageOut)
def unsubscribe(request: HttpRequest, data: EmailIn):
    email = clean_email(data.email)

    subscriber = Subscriber.objects.filter(email=email).first()
    if not subscriber:
        raise HttpError(404, "Subscriber not found")

    subscriber.status = SubscriberStatus.UNSUBSCRIBED
    subscriber.save(update_fields=["status", "updated_at"])
    logger.info(f"[Subscribers] Unsubscribed {email}")
    return {"success": True, "message": "Successfully unsubscribed"}


@router.get("/subscribers", response=list[SubscriberOut])
def list_subscribers(request: HttpRequest):
    return [SubscriberOut.from_orm(s) for s in Subscriber.objects.order_by("-subscribed_at")]


@router.delete("/subscribers/{subscriber_id}", response=SubscriberMessageOut)
def delete_subscriber(request: HttpRequest, subscriber_id: str):
    if not is_object_id(subscriber_id):
        raise HttpError(400, "Invalid subscriber id")

    deleted, _ = Subscriber.objects.filter(pk=subscriber_id).delete()
    if not deleted:
        raise HttpError(404, "Subscriber not found")
    return {"success": True, "message": "Subscriber deleted successfully"}
