from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator
from pydantic.alias_generators import to_camel

APPLICATION_STATUSES = ("Pending", "Approved", "Rejected")
DECISION_STATUSES = ("Approved", "Rejected")


class CamelModel(BaseModel):
    """Row attributes are snake_case, the wire format is camelCase."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


# --- jobs ---

class JobInput(CamelModel):
    title: str
    description: str
    department: Optional[str] = None
    location: Optional[str] = None
    employment_type: Optional[str] = None
    salary_range: Optional[str] = None
    requirements: Optional[str] = None
    is_active: bool = True
    notes: Optional[str] = None
    created_by: Optional[str] = None

    @field_validator("title", "description")
    @classmethod
    def _required_text(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Title and description are required")
        return value.strip()

    @field_validator("department", "location", "employment_type", "salary_range",
                     "requirements", "notes", "created_by", mode="before")
    @classmethod
    def _optional_text(cls, value):
        return _blank_to_none(value)


class JobPublic(CamelModel):
    job_id: str
    title: str
    description: str
    department: Optional[str] = None
    location: Optional[str] = None
    employment_type: Optional[str] = None
    salary_range: Optional[str] = None
    requirements: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class Job(JobPublic):
    created_by: Optional[str] = None
    notes: Optional[str] = None


class JobStatusUpdate(CamelModel):
    is_active: StrictBool


class JobMutationResponse(BaseModel):
    success: bool = True
    message: str
    job: Job


class MessageResponse(BaseModel):
    success: bool = True
    message: str


# --- applications ---

class ApplicationSubmission(CamelModel):
    candidate_name: str
    candidate_email: str
    candidate_phone: Optional[str] = None
    cgpa: Optional[float] = Field(default=None, ge=0.0, le=4.0)
    university: Optional[str] = None
    experience_years: Optional[int] = Field(default=None, ge=0)
    job_id: Optional[str] = None
    job_title: Optional[str] = None
    application_id: Optional[UUID] = None

    @field_validator("candidate_phone", "cgpa", "university", "experience_years",
                     "job_id", "job_title", "application_id", mode="before")
    @classmethod
    def _optional(cls, value):
        return _blank_to_none(value)

    @field_validator("candidate_name", "candidate_email", mode="before")
    @classmethod
    def _required(cls, value):
        value = _blank_to_none(value)
        if value is None:
            raise ValueError("Name and email are required")
        return value.strip()

    @field_validator("cgpa")
    @classmethod
    def _two_decimals(cls, value):
        return round(value, 2) if value is not None else None


class Application(CamelModel):
    application_id: str
    candidate_name: str
    candidate_email: str
    candidate_phone: Optional[str] = None
    cgpa: Optional[float] = None
    university: Optional[str] = None
    experience_years: Optional[int] = None
    resume_blob_path: Optional[str] = None
    job_id: Optional[str] = None
    job_title: Optional[str] = None
    status: str
    submitted_at: datetime
    notes: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None


class ApplicationStatusUpdate(CamelModel):
    status: Optional[str] = None
    reviewed_by: Optional[str] = None


class SubmissionResponse(CamelModel):
    success: bool = True
    application_id: str
    message: str = "Application submitted successfully"


class ApplicationMutationResponse(BaseModel):
    success: bool = True
    message: str
    application: Application


# --- statistics ---

class StatusSummary(BaseModel):
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0


class JobApplicationStats(CamelModel):
    job_id: str
    job_title: str
    total_applications: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0


class ApplicationStatistics(CamelModel):
    summary: StatusSummary
    by_job: List[JobApplicationStats]
