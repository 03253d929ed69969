import logging

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..models.application import JobApplication
from ..models.job import Job
from ..schemas.job import JobOpening, JobOpeningUpdate
from ..utils.error_handlers import ForbiddenError, NotFoundError, get_error_message, handle_database_error

logger = logging.getLogger(__name__)


def list_jobs(
    db: Session,
    *,
    status: str | None = None,
    search: str | None = None,
    owner_id: int | None = None,
) -> list[Job]:
    """
    Jobs newest first.

    With ``owner_id`` only that recruiter's jobs are returned, optionally narrowed
    by ``status``. Without it this is the public board and only active jobs are
    listed, whatever ``status`` says.
    """
    q = db.query(Job).options(joinedload(Job.recruiter))

    if owner_id is not None:
        q = q.filter(Job.recruiter_id == int(owner_id))
        if status:
            q = q.filter(Job.status == status)
    else:
        q = q.filter(Job.status == "active")

    if search:
        pattern = f"%{search.lower()}%"
        q = q.filter(
            or_(
                func.lower(Job.job_name).like(pattern),
                func.lower(Job.job_description).like(pattern),
            )
        )

    return q.order_by(Job.created_at.desc(), Job.id.desc()).all()


def application_counts(db: Session, job_ids: list[int]) -> dict[int, int]:
    if not job_ids:
        return {}
    rows = (
        db.query(JobApplication.job_id, func.count(JobApplication.id))
        .filter(JobApplication.job_id.in_(job_ids))
        .group_by(JobApplication.job_id)
        .all()
    )
    return {int(job_id): int(count) for job_id, count in rows}


def get_job(db: Session, job_id: int) -> Job:
    job = db.query(Job).options(joinedload(Job.recruiter)).filter(Job.id == int(job_id)).first()
    if not job:
        raise NotFoundError(get_error_message("job_not_found"))
    return job


def get_visible_job(db: Session, job_id: int, *, viewer_id: int | None) -> Job:
    """A job as seen by ``viewer_id``: drafts and inactive jobs exist only for their owner."""
    job = get_job(db, job_id)
    if job.status != "active" and job.recruiter_id != viewer_id:
        raise NotFoundError(get_error_message("job_not_found"))
    return job


def get_applicable_job(db: Session, job_id: int) -> Job:
    """
    A job as seen by someone applying to it.

    Drafts were never published and do not exist for applicants. Inactive jobs
    are returned so the caller can report them as closed.
    """
    job = get_job(db, job_id)
    if job.status == "draft":
        raise NotFoundError(get_error_message("job_not_found"))
    return job


def get_owned_job(db: Session, job_id: int, *, recruiter_id: int) -> Job:
    job = get_job(db, job_id)
    if job.recruiter_id != int(recruiter_id):
        raise ForbiddenError(get_error_message("job_forbidden"))
    return job


def create_job(db: Session, *, recruiter_id: int, opening: JobOpening) -> Job:
    job = Job(recruiter_id=int(recruiter_id), **opening.to_columns())
    try:
        db.add(job)
        db.commit()
        db.refresh(job)
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_database_error(e, "creating job") from e
    logger.info("Recruiter %s created job %s (%s)", recruiter_id, job.id, job.status)
    return job


def update_job(db: Session, job_id: int, *, recruiter_id: int, changes: JobOpeningUpdate) -> Job:
    job = get_owned_job(db, job_id, recruiter_id=recruiter_id)
    for column, value in changes.to_columns().items():
        setattr(job, column, value)
    try:
        db.commit()
        db.refresh(job)
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_database_error(e, "updating job") from e
    return job


def delete_job(db: Session, job_id: int, *, recruiter_id: int) -> None:
    job = get_owned_job(db, job_id, recruiter_id=recruiter_id)
    try:
        db.delete(job)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_database_error(e, "deleting job") from e
    logger.info("Recruiter %s deleted job %s", recruiter_id, job_id)
