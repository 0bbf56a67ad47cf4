"""
Newsletter subscriber model.
"""

from django.db import models

from utils.ids import generate_object_id


class SubscriberStatus(models.TextChoices):
    ACTIVE = "active", "Active"
    UNSUBSCRIBED = "unsubscribed", "Unsubscribed"


class Subscriber(models.Model):
    id = models.CharField(primary_key=True, max_length=24, default=generate_object_id, editable=False)
    email = models.CharField(max_length=255, unique=True)
    status = models.CharField(max_length=20, choices=SubscriberStatus.choices, default=SubscriberStatus.ACTIVE)
    subscribed_at = models.DateTimeField(auto_now_add=True, db_column="subscribedAt")
    updated_at = models.DateTimeField(auto_now=True, db_column="updatedAt")

    class Meta:
        db_table = "subscribers"
        ordering = ["-subscribed_at"]

    def __str__(self) -> str:
        return self.email
