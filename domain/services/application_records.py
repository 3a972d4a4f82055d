import uuid
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError as SchemaError

from domain.errors import ValidationError, DuplicateKey, StoreUnavailable
from domain.schemas import ApplicationSubmission
from domain.services.resume_uploads import ResumeFile, ResumeUploader
from infra.repositories.applications_repository import ApplicationsRepository
from infra.repositories.jobs_repository import JobsRepository

logger = logging.getLogger(__name__)


def describe_schema_error(exc: SchemaError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ()))
        msg = err.get("msg", "invalid value").removeprefix("Value error, ")
        parts.append(f"{field}: {msg}" if field else msg)
    return "; ".join(parts)


class ApplicationRecordService:
    """Accepts candidate submissions: resume upload first, then the application row.

    A failed upload aborts the submission before anything is written. A failed
    insert after a successful upload leaves the resume in the object store; the
    key is logged so it can be found and removed by hand.
    """

    def __init__(self, applications: ApplicationsRepository, jobs: JobsRepository,
                 uploader: ResumeUploader):
        self.applications = applications
        self.jobs = jobs
        self.uploader = uploader

    def validate(self, fields: Dict[str, Any]) -> ApplicationSubmission:
        try:
            return ApplicationSubmission.model_validate(fields)
        except SchemaError as exc:
            raise ValidationError(describe_schema_error(exc)) from exc

    def submit(self, fields: Dict[str, Any], resume: Optional[ResumeFile] = None) -> str:
        submission = self.validate(fields)
        if resume is not None:
            self.uploader.validate(resume)

        application_id = str(submission.application_id or uuid.uuid4())
        job_title = submission.job_title
        if job_title is None and submission.job_id:
            job = self.jobs.get(submission.job_id)
            job_title = job.title if job else None

        resume_blob_path = None
        if resume is not None:
            resume_blob_path = self.uploader.store(
                resume,
                applicant_name=submission.candidate_name,
                applicant_email=submission.candidate_email,
                job_id=submission.job_id,
                application_id=application_id,
                job_title=job_title,
            )

        try:
            self.applications.insert({
                "application_id": application_id,
                "candidate_name": submission.candidate_name,
                "candidate_email": submission.candidate_email,
                "candidate_phone": submission.candidate_phone,
                "cgpa": submission.cgpa,
                "university": submission.university,
                "experience_years": submission.experience_years,
                "resume_blob_path": resume_blob_path,
                "job_id": submission.job_id,
                "job_title": job_title,
            })
        except (DuplicateKey, StoreUnavailable) as exc:
            if resume_blob_path:
                logger.warning("Application %s not recorded, resume left orphaned at %s: %s",
                               application_id, resume_blob_path, exc)
            raise

        logger.info("Application %s recorded for job %s", application_id, submission.job_id)
        return application_id
