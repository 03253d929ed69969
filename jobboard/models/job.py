from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class Job(Base):
    __tablename__ = "jobs"
    __table_args__ = (
        CheckConstraint("salary_max >= salary_min", name="ck_jobs_salary_range"),
        CheckConstraint("number_of_candidates_needed > 0", name="ck_jobs_candidates_needed"),
    )

    id = Column(Integer, primary_key=True, index=True)
    recruiter_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)
    job_name = Column(String(150), nullable=False)
    job_type = Column(String(30), nullable=False)
    job_description = Column(Text, nullable=False)
    department = Column(String(120), nullable=True)
    company_name = Column(String(255), nullable=True)
    number_of_candidates_needed = Column(Integer, nullable=False)
    salary_min = Column(Integer, nullable=False)
    salary_max = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default="draft")  # draft / active / inactive

    # Applicant profile requirements: Mandatory / Optional / Off
    req_full_name = Column(String(10), nullable=True, default="Off")
    req_photo_profile = Column(String(10), nullable=True, default="Off")
    req_gender = Column(String(10), nullable=True, default="Off")
    req_domicile = Column(String(10), nullable=True, default="Off")
    req_email = Column(String(10), nullable=True, default="Off")
    req_phone_number = Column(String(10), nullable=True, default="Off")
    req_linkedin_link = Column(String(10), nullable=True, default="Off")
    req_date_of_birth = Column(String(10), nullable=True, default="Off")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    recruiter = relationship("Profile", back_populates="jobs")
    applications = relationship(
        "JobApplication",
        back_populates="job",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
