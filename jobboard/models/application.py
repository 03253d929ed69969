from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from ..database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JobApplication(Base):
    __tablename__ = "job_applications"
    __table_args__ = (
        # One application per applicant and job; inserts that collide are reported as conflicts.
        UniqueConstraint("job_id", "applicant_id", name="uq_job_applications_job_applicant"),
    )

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    applicant_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)

    # Snapshot of what the applicant submitted
    full_name = Column(String(255), nullable=True)
    photo_url = Column(String(500), nullable=True)
    gender = Column(String(10), nullable=True)
    domicile = Column(String(120), nullable=True)
    email = Column(String(255), nullable=True)
    phone_number = Column(String(30), nullable=True)
    linkedin_url = Column(String(255), nullable=True)
    date_of_birth = Column(Date, nullable=True)

    # Python-side default: date-window filters compare against Python datetimes.
    applied_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    job = relationship("Job", back_populates="applications")
    applicant = relationship("Profile", back_populates="applications")
