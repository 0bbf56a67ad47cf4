"""
Contact form submission model.
"""

from django.db import models

from utils.ids import generate_object_id


class ContactBudget(models.TextChoices):
    UNDER_10K = "under-10k", "Under 10k"
    FROM_10K_TO_25K = "10k-25k", "10k-25k"
    FROM_25K_TO_50K = "25k-50k", "25k-50k"
    FROM_50K_TO_100K = "50k-100k", "50k-100k"
    OVER_100K = "over-100k", "Over 100k"


class ContactTimeline(models.TextChoices):
    ASAP = "asap", "ASAP"
    ONE_TO_THREE_MONTHS = "1-3-months", "1-3 months"
    THREE_TO_SIX_MONTHS = "3-6-months", "3-6 months"
    SIX_TO_TWELVE_MONTHS = "6-12-months", "6-12 months"
    FLEXIBLE = "flexible", "Flexible"


class ContactStatus(models.TextChoices):
    NEW = "new", "New"
    READ = "read", "Read"
    REPLIED = "replied", "Replied"
    ARCHIVED = "archived", "Archived"


class ContactSubmission(models.Model):
    """Message sent through the contact form."""

    id = models.CharField(primary_key=True, max_length=24, default=generate_object_id, editable=False)
    name = models.CharField(max_length=255)
    email = models.CharField(max_length=255)
    company = models.CharField(max_length=255, blank=True, default="")
    phone = models.CharField(max_length=50, blank=True, default="")
    subject = models.CharField(max_length=500)
    message = models.TextField()
    budget = models.CharField(max_length=20, choices=ContactBudget.choices, blank=True, default="")
    timeline = models.CharField(max_length=20, choices=ContactTimeline.choices, blank=True, default="")
    status = models.CharField(max_length=20, choices=ContactStatus.choices, default=ContactStatus.NEW)
    created_at = models.DateTimeField(auto_now_add=True, db_column="createdAt")
    updated_at = models.DateTimeField(auto_now=True, db_column="updatedAt")

    class Meta:
        db_table = "contact_submissions"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.name} - {self.subject}"
