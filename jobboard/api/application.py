from datetime import date, datetime
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.application import JobApplication
from ..services.applications import list_my_applications
from ..utils.dependencies import current_user_id, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/applications", tags=["Applications"])


def _iso(value):
    return value.isoformat() if isinstance(value, (date, datetime)) else value


def application_to_public(
    application: JobApplication,
    *,
    include_applicant: bool = False,
    include_job: bool = False,
) -> dict:
    payload = {
        "id": application.id,
        "job_id": application.job_id,
        "applicant_id": application.applicant_id,
        "full_name": application.full_name,
        "photo_url": application.photo_url,
        "gender": application.gender,
        "domicile": application.domicile,
        "email": application.email,
        "phone_number": application.phone_number,
        "linkedin_url": application.linkedin_url,
        "date_of_birth": _iso(application.date_of_birth),
        "applied_at": _iso(application.applied_at),
    }
    if include_applicant:
        applicant = application.applicant
        payload["applicant"] = {
            "id": applicant.id,
            "username": applicant.username,
            "avatar_url": applicant.avatar_url,
        } if applicant else None
    if include_job:
        job = application.job
        payload["job"] = {
            "id": job.id,
            "job_name": job.job_name,
            "job_type": job.job_type,
            "company_name": job.company_name,
            "salary_min": job.salary_min,
            "salary_max": job.salary_max,
            "status": job.status,
        } if job else None
    return payload


@router.get("/my")
def my_applications(db: Session = Depends(get_db), user=Depends(get_current_user)):
    applications = list_my_applications(db, current_user_id(user))
    return {
        "success": True,
        "applications": [application_to_public(a, include_job=True) for a in applications],
    }
