"""
Contact form endpoints.
"""

import logging

from django.http import HttpRequest
from ninja import Router
from ninja.errors import HttpError

from apps.notifications.email import notify_contact_submission
from utils.ids import is_object_id
from .models import ContactStatus, ContactSubmission
from .schemas import ContactIn, ContactMessageOut, ContactOut, ContactStatusIn

logger = logging.getLogger(__name__)

router = Router()


def get_submission(contact_id: str) -> ContactSubmission:
    if not is_object_id(contact_id):
        raise HttpError(400, "Invalid contact id")
    contact = ContactSubmission.objects.filter(pk=contact_id).first()
    if not contact:
        raise HttpError(404, "Contact not found")
    return contact


@router.post("/", response={201: ContactMessageOut})
def create_contact(request: HttpRequest, data: ContactIn):
    """Store a contact form submission and notify the team."""
    contact = ContactSubmission.objects.create(
        name=data.name,
        email=data.email,
        subject=data.subject,
        message=data.message,
        company=(data.company or "").strip(),
        phone=(data.phone or "").strip(),
        budget=data.budget or "",
        timeline=data.timeline or "",
    )
    logger.info(f"[Contact] Submission {contact.pk} from {contact.email}")

    notify_contact_submission(contact)

    return 201, {
        "success": True,
        "message": "Contact form submitted successfully",
        "data": ContactOut.from_orm(contact),
    }


@router.get("/", response=list[ContactOut])
def list_contacts(request: HttpRequest):
    return [ContactOut.from_orm(c) for c in ContactSubmission.objects.order_by("-created_at")]


@router.get("/{contact_id}", response=ContactOut)
def get_contact(request: HttpRequest, contact_id: str):
    return ContactOut.from_orm(get_submission(contact_id))


@router.patch("/{contact_id}", response=ContactOut)
def update_contact_status(request: HttpRequest, contact_id: str, data: ContactStatusIn):
    contact = get_submission(contact_id)

    if data.status not in ContactStatus.values:
        raise HttpError(400, f"Invalid status. Must be one of: {', '.join(ContactStatus.values)}")

    contact.status = data.status
    contact.save(update_fields=["status", "updated_at"])
    return ContactOut.from_orm(contact)


@router.delete("/{contact_id}", response=ContactMessageOut)
def delete_contact(request: HttpRequest, contact_id: str):
    contact = get_submission(contact_id)
    contact.delete()
    return {"success": True, "message": "Contact deleted successfully"}
