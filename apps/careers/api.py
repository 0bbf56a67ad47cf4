"""
Career application endpoints.
"""

import logging

from django.conf import settings
from django.http import HttpRequest, HttpResponse
from django.utils.http import content_disposition_header
from ninja import Form, Router
from ninja.errors import HttpError

from apps.notifications.email import notify_career_application
from utils.ids import is_object_id
from utils.uploads import RESUME_EXTENSIONS, RESUME_MIME_TYPES, UploadRejected, validate_upload
from .models import ApplicationStatus, CareerApplication
from .schemas import CareerIn, CareerMessageOut, CareerOut, CareerStatusIn

logger = logging.getLogger(__name__)

router = Router()


def get_application(career_id: str) -> CareerApplication:
    if not is_object_id(career_id):
        raise HttpError(400, "Invalid career application id")
    career = CareerApplication.objects.filter(pk=career_id).first()
    if not career:
        raise HttpError(404, "Career application not found")
    return career


@router.post("/", response={201: CareerOut})
def create_application(request: HttpRequest, data: Form[CareerIn]):
    """Submit a job application with a resume file."""
    resume = request.FILES.get("resume")
    if not resume:
        raise HttpError(400, "Resume file is required")

    try:
        validate_upload(resume, RESUME_EXTENSIONS, RESUME_MIME_TYPES, settings.RESUME_MAX_SIZE, kind="PDF or Word")
    except UploadRejected as e:
        raise HttpError(400, str(e))

    career = CareerApplication.objects.create(
        name=data.name,
        email=data.email,
        phone=data.phone,
        position=data.position,
        experience=data.experience,
        current_company=data.currentCompany,
        expected_salary=data.expectedSalary,
        notice_period=data.noticePeriod,
        cover_letter=(data.coverLetter or "").strip() or None,
        resume_data=resume.read(),
        resume_content_type=resume.content_type,
        resume_filename=resume.name,
        status=ApplicationStatus.PENDING,
    )
    logger.info(f"[Career] Application {career.pk} received for {career.position}")

    notify_career_application(career)

    return 201, CareerOut.from_orm(career)


@router.get("/", response=list[CareerOut])
def list_applications(request: HttpRequest):
    """All applications, newest first."""
    return [CareerOut.from_orm(c) for c in CareerApplication.objects.order_by("-created_at")]


@router.get("/{career_id}", response=CareerOut)
def get_application_detail(request: HttpRequest, career_id: str):
    return CareerOut.from_orm(get_application(career_id))


@router.get("/{career_id}/resume")
def download_resume(request: HttpRequest, career_id: str):
    """Stream the stored resume as an attachment."""
    career = get_application(career_id)
    if not career.has_resume:
        raise HttpError(404, "Resume not found")

    response = HttpResponse(bytes(career.resume_data), content_type=career.resume_content_type or "application/octet-stream")
    response["Content-Disposition"] = content_disposition_header(True, career.resume_filename or "resume")
    return response


@router.patch("/{career_id}", response=CareerOut)
def update_application_status(request: HttpRequest, career_id: str, data: CareerStatusIn):
    """Move an application through review."""
    career = get_application(career_id)

    if data.status not in ApplicationStatus.values:
        raise HttpError(400, f"Invalid status. Must be one of: {', '.join(ApplicationStatus.values)}")

    career.status = data.status
    career.save(update_fields=["status", "updated_at"])
    return CareerOut.from_orm(career)


@router.delete("/{career_id}", response=CareerMessageOut)
def delete_application(request: HttpRequest, career_id: str):
    career = get_application(career_id)
    career.delete()
    return {"success": True, "message": "Career application deleted successfully"}
