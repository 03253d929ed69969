from sqlalchemy import Column, Date, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash
    role = Column(String(20), nullable=False)  # recruiter / job_seeker
    full_name = Column(String(255), nullable=True)
    username = Column(String(100), nullable=True)
    avatar_url = Column(String(500), nullable=True)
    website = Column(String(255), nullable=True)
    company_name = Column(String(255), nullable=True)
    gender = Column(String(10), nullable=True)  # male / female
    domicile = Column(String(120), nullable=True)
    phone_number = Column(String(30), nullable=True)
    linkedin_url = Column(String(255), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    jobs = relationship("Job", back_populates="recruiter")
    applications = relationship("JobApplication", back_populates="applicant")
