from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime, Boolean, Integer, Numeric
from infra.db.session import Base


def utcnow() -> datetime:
    # naive UTC, matching what SQLite hands back on reload
    return datetime.now(timezone.utc).replace(tzinfo=None)


class JobRecord(Base):
    __tablename__ = "jobs"
    job_id = Column(String(36), primary_key=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    department = Column(String(100), nullable=True)
    location = Column(String(100), nullable=True)
    employment_type = Column(String(50), nullable=True)
    salary_range = Column(String(100), nullable=True)
    requirements = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow)
    created_by = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)


class ApplicationRecord(Base):
    __tablename__ = "applications"
    application_id = Column(String(36), primary_key=True)
    candidate_name = Column(String(200), nullable=False)
    candidate_email = Column(String(256), nullable=False)
    candidate_phone = Column(String(50), nullable=True)
    cgpa = Column(Numeric(3, 2, asdecimal=False), nullable=True)
    university = Column(String(200), nullable=True)
    experience_years = Column(Integer, nullable=True)
    resume_blob_path = Column(String(500), nullable=True)
    # no foreign key: the delete guard lives in JobsRepository.delete
    job_id = Column(String(100), nullable=True, index=True)
    job_title = Column(String(200), nullable=True)   # snapshot at submission
    status = Column(String(50), nullable=False, default="Pending")
    submitted_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    notes = Column(Text, nullable=True)
    reviewed_by = Column(String(256), nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
