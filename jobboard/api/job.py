from datetime import datetime
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from ..config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ..database import get_db
from ..models.job import Job
from ..schemas.application import describe_application_form, requirements_for_job, validate_application
from ..schemas.job import JobOpening, JobOpeningUpdate
from ..services import applications as application_service
from ..services import jobs as job_service
from ..utils.dependencies import current_user_id, get_current_user, get_optional_user
from ..utils.error_handlers import ConflictError, get_error_message
from ..utils.roles import job_seeker_only, recruiter_only
from ..utils.validation import validate_job_status, validate_string_field
from .application import application_to_public

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["Jobs"])


def _job_to_public(job: Job, *, application_count: int | None = None) -> dict:
    recruiter = job.recruiter
    payload = {
        "id": job.id,
        "recruiter_id": job.recruiter_id,
        "job_name": job.job_name,
        "job_type": job.job_type,
        "job_description": job.job_description,
        "department": job.department,
        "company_name": job.company_name,
        "number_of_candidates_needed": job.number_of_candidates_needed,
        "salary_min": job.salary_min,
        "salary_max": job.salary_max,
        "status": job.status,
        "req_full_name": job.req_full_name,
        "req_photo_profile": job.req_photo_profile,
        "req_gender": job.req_gender,
        "req_domicile": job.req_domicile,
        "req_email": job.req_email,
        "req_phone_number": job.req_phone_number,
        "req_linkedin_link": job.req_linkedin_link,
        "req_date_of_birth": job.req_date_of_birth,
        "created_at": job.created_at.isoformat() if isinstance(job.created_at, datetime) else job.created_at,
        "updated_at": job.updated_at.isoformat() if isinstance(job.updated_at, datetime) else job.updated_at,
        "recruiter": {
            "full_name": recruiter.full_name,
            "avatar_url": recruiter.avatar_url,
            "company_name": recruiter.company_name,
        } if recruiter else None,
    }
    if application_count is not None:
        payload["application_count"] = application_count
    return payload


def _viewer_id(user: dict | None) -> int | None:
    return current_user_id(user) if user else None


@router.get("")
def list_jobs(
    status: str | None = Query(default=None, description="draft/active/inactive; only applies with myJobs"),
    search: str | None = Query(default=None, description="Substring of job name or description"),
    my_jobs: bool = Query(default=False, alias="myJobs", description="Only the caller's own jobs"),
    db: Session = Depends(get_db),
    user=Depends(get_optional_user),
):
    status_norm = validate_job_status(status)
    search_norm = validate_string_field(search, "Search", max_length=100, required=False)

    # Anonymous callers asking for "my jobs" get the public board.
    owner_id = _viewer_id(user) if my_jobs else None

    jobs = job_service.list_jobs(db, status=status_norm, search=search_norm, owner_id=owner_id)
    counts = job_service.application_counts(db, [j.id for j in jobs])
    return {
        "success": True,
        "jobs": [_job_to_public(j, application_count=counts.get(j.id, 0)) for j in jobs],
    }


@router.post("", status_code=201)
def create_job(
    payload: JobOpening,
    db: Session = Depends(get_db),
    user=Depends(recruiter_only),
):
    job = job_service.create_job(db, recruiter_id=current_user_id(user), opening=payload)
    return {"success": True, "job": _job_to_public(job, application_count=0)}


@router.get("/{job_id:int}")
def get_job(
    job_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_optional_user),
):
    job = job_service.get_visible_job(db, job_id, viewer_id=_viewer_id(user))
    return {"success": True, "job": _job_to_public(job)}


@router.patch("/{job_id:int}")
def update_job(
    job_id: int,
    payload: JobOpeningUpdate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    job = job_service.update_job(db, job_id, recruiter_id=current_user_id(user), changes=payload)
    return {"success": True, "job": _job_to_public(job)}


@router.delete("/{job_id:int}", status_code=200)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    job_service.delete_job(db, job_id, recruiter_id=current_user_id(user))
    return {"success": True, "deleted_job_id": job_id}


@router.get("/{job_id:int}/application-form")
def application_form(
    job_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_optional_user),
):
    job = job_service.get_visible_job(db, job_id, viewer_id=_viewer_id(user))
    return {
        "success": True,
        "job_id": job.id,
        "fields": describe_application_form(requirements_for_job(job)),
    }


@router.get("/{job_id:int}/applications")
def list_applications(
    job_id: int,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=DEFAULT_PAGE_SIZE, alias="pageSize", ge=1, le=MAX_PAGE_SIZE),
    sort_by: str = Query(default="applied_at", alias="sortBy"),
    sort_order: str = Query(default="desc", alias="sortOrder"),
    phone: str | None = Query(default=None, alias="phoneFilter"),
    gender: str | None = Query(default=None, alias="genderFilter"),
    domicile: str | None = Query(default=None, alias="domicileFilter"),
    applied_within: str | None = Query(default=None, alias="dateFilter"),
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    job = job_service.get_owned_job(db, job_id, recruiter_id=current_user_id(user))
    rows, total = application_service.list_applications(
        db,
        job,
        phone=phone,
        gender=gender,
        domicile=domicile,
        applied_within=applied_within,
        sort_by=sort_by,
        sort_order=sort_order.lower(),
        page=page,
        page_size=page_size,
    )
    return {
        "success": True,
        "applications": [application_to_public(a, include_applicant=True) for a in rows],
        "total": total,
        "page": page,
        "page_size": page_size,
        "total_pages": application_service.total_pages(total, page_size),
    }


@router.post("/{job_id:int}/applications", status_code=201)
def apply_to_job(
    job_id: int,
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    user=Depends(job_seeker_only),
):
    applicant_id = current_user_id(user)
    job = job_service.get_applicable_job(db, job_id)
    # A resubmission is a conflict whatever its body holds. The unique
    # constraint in create_application still decides racing submissions.
    if application_service.has_applied(db, job_id=job.id, applicant_id=applicant_id):
        raise ConflictError(get_error_message("already_applied"))
    values = validate_application(requirements_for_job(job), payload)
    application = application_service.create_application(db, job=job, applicant_id=applicant_id, values=values)
    return {"success": True, "application": application_to_public(application)}
