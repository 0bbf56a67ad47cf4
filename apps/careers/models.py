"""
Career application model.
"""

from django.db import models

from utils.ids import generate_object_id


class ApplicationStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    REVIEWED = "reviewed", "Reviewed"
    SHORTLISTED = "shortlisted", "Shortlisted"
    REJECTED = "rejected", "Rejected"


class CareerApplication(models.Model):
    """Job application with the resume stored inline."""

    id = models.CharField(primary_key=True, max_length=24, default=generate_object_id, editable=False)
    name = models.CharField(max_length=255)
    email = models.CharField(max_length=255)
    phone = models.CharField(max_length=50)
    position = models.CharField(max_length=255)
    experience = models.CharField(max_length=255)
    current_company = models.CharField(max_length=255, db_column="currentCompany")
    expected_salary = models.CharField(max_length=255, db_column="expectedSalary")
    notice_period = models.CharField(max_length=255, db_column="noticePeriod")
    cover_letter = models.TextField(null=True, blank=True, db_column="coverLetter")
    resume_data = models.BinaryField(null=True, blank=True, db_column="resumeData")
    resume_content_type = models.CharField(max_length=255, null=True, blank=True, db_column="resumeContentType")
    resume_filename = models.CharField(max_length=255, null=True, blank=True, db_column="resumeFilename")
    status = models.CharField(max_length=20, choices=ApplicationStatus.choices, default=ApplicationStatus.PENDING)
    created_at = models.DateTimeField(auto_now_add=True, db_column="createdAt")
    updated_at = models.DateTimeField(auto_now=True, db_column="updatedAt")

    class Meta:
        db_table = "career_applications"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.name} - {self.position}"

    @property
    def has_resume(self) -> bool:
        return bool(self.resume_data)
