import logging
import math
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..config import DEFAULT_PAGE_SIZE
from ..constants import APPLICATION_SORT_COLUMNS, DATE_FILTER_WINDOWS
from ..models.application import JobApplication
from ..models.job import Job
from ..utils.error_handlers import ConflictError, ValidationError, get_error_message, handle_database_error

logger = logging.getLogger(__name__)


def _is_set(value: str | None) -> bool:
    return bool(value) and value != "all"


def list_applications(
    db: Session,
    job: Job,
    *,
    phone: str | None = None,
    gender: str | None = None,
    domicile: str | None = None,
    applied_within: str | None = None,
    sort_by: str = "applied_at",
    sort_order: str = "desc",
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> tuple[list[JobApplication], int]:
    """
    One page of a job's applications plus the total matching count.

    Filters set to ``None``, ``""`` or ``"all"`` are ignored. ``phone`` matches a
    prefix (typically a country code) and ``applied_within`` is one of
    ``24h``/``1w``/``1m``.
    """
    if sort_by not in APPLICATION_SORT_COLUMNS:
        raise ValidationError(
            get_error_message("invalid_sort"),
            details={"sortBy": f"Must be one of: {', '.join(APPLICATION_SORT_COLUMNS)}"},
        )
    if sort_order not in {"asc", "desc"}:
        raise ValidationError(get_error_message("validation_error"), details={"sortOrder": "Must be asc or desc"})

    q = db.query(JobApplication).filter(JobApplication.job_id == job.id)

    if _is_set(phone):
        q = q.filter(JobApplication.phone_number.like(f"{phone}%"))
    if _is_set(gender):
        q = q.filter(JobApplication.gender == gender)
    if _is_set(domicile):
        q = q.filter(JobApplication.domicile == domicile)
    if _is_set(applied_within):
        days = DATE_FILTER_WINDOWS.get(applied_within)
        if days is None:
            raise ValidationError(get_error_message("invalid_date_filter"), details={"dateFilter": "Unknown window"})
        since = datetime.now(timezone.utc) - timedelta(days=days)
        q = q.filter(JobApplication.applied_at >= since)

    total = q.count()

    column = getattr(JobApplication, sort_by)
    if sort_order == "asc":
        q = q.order_by(column.asc(), JobApplication.id.asc())
    else:
        q = q.order_by(column.desc(), JobApplication.id.desc())

    rows = q.options(joinedload(JobApplication.applicant)).offset((page - 1) * page_size).limit(page_size).all()
    return rows, total


def total_pages(total: int, page_size: int) -> int:
    return math.ceil(total / page_size) if page_size else 0


def create_application(db: Session, *, job: Job, applicant_id: int, values: dict) -> JobApplication:
    """
    Insert an application and let the (job, applicant) unique constraint decide duplicates.

    There is no read-before-write: of several concurrent submissions by the
    same applicant exactly one row lands and the others get ``ConflictError``.
    """
    if job.status != "active":
        raise ValidationError(get_error_message("job_closed"))

    application = JobApplication(job_id=job.id, applicant_id=int(applicant_id), **values)
    try:
        db.add(application)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if has_applied(db, job_id=job.id, applicant_id=applicant_id):
            logger.info("Duplicate application by %s to job %s rejected", applicant_id, job.id)
            raise ConflictError(get_error_message("already_applied")) from None
        raise handle_database_error(e, "creating application") from e
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_database_error(e, "creating application") from e

    db.refresh(application)
    logger.info("Applicant %s applied to job %s", applicant_id, job.id)
    return application


def has_applied(db: Session, *, job_id: int, applicant_id: int) -> bool:
    return (
        db.query(JobApplication.id)
        .filter(JobApplication.job_id == job_id, JobApplication.applicant_id == int(applicant_id))
        .first()
        is not None
    )


def list_my_applications(db: Session, applicant_id: int) -> list[JobApplication]:
    return (
        db.query(JobApplication)
        .options(joinedload(JobApplication.job))
        .filter(JobApplication.applicant_id == int(applicant_id))
        .order_by(JobApplication.applied_at.desc(), JobApplication.id.desc())
        .all()
    )
