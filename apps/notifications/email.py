"""
Email notifications for contact and career submissions.

Sending is best effort: failures are logged and never reach the caller,
whose submission has already been stored.
"""

import logging

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils.html import strip_tags

logger = logging.getLogger(__name__)


def admin_recipient() -> str:
    return settings.ADMIN_EMAIL or settings.EMAIL_HOST_USER


def send_html_email(subject: str, template: str, context: dict, to: str) -> None:
    """Render a template and send it as HTML with a plain-text alternative."""
    html = render_to_string(template, context)
    message = EmailMultiAlternatives(
        subject=subject,
        body=strip_tags(html),
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[to],
    )
    message.attach_alternative(html, "text/html")
    message.send()


def notify_contact_submission(contact) -> bool:
    """Notify the admin of a contact submission and confirm receipt to the sender."""
    try:
        admin = admin_recipient()
        if admin:
            send_html_email(
                f"New Contact Form Submission: {contact.subject}",
                "notifications/contact_admin.html",
                {"contact": contact},
                admin,
            )
        send_html_email(
            "Thank you for contacting us",
            "notifications/contact_confirmation.html",
            {"contact": contact},
            contact.email,
        )
    except Exception as e:
        logger.exception(f"[Email] Failed to send contact notification for {contact.pk}: {e}")
        return False

    logger.info(f"[Email] Contact notification sent for {contact.pk}")
    return True


def notify_career_application(career) -> bool:
    """Thank the applicant and notify the admin of a new application."""
    try:
        send_html_email(
            "Thank you for your job application - SoSapient",
            "notifications/career_applicant.html",
            {"career": career},
            career.email,
        )
        admin = admin_recipient()
        if admin:
            send_html_email(
                "New Job Application Received",
                "notifications/career_admin.html",
                {"career": career},
                admin,
            )
    except Exception as e:
        logger.exception(f"[Email] Failed to send career notification for {career.pk}: {e}")
        return False

    logger.info(f"[Email] Career notification sent for {career.pk}")
    return True
