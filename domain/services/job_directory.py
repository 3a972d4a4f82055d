import logging
from typing import List

from domain.errors import HasDependents, NotFound
from domain.schemas import JobInput
from infra.db.models import JobRecord
from infra.repositories.jobs_repository import JobsRepository

logger = logging.getLogger(__name__)


class JobDirectory:
    def __init__(self, jobs: JobsRepository, default_creator: str = "HR User"):
        self.jobs = jobs
        self.default_creator = default_creator

    def list(self, active_only: bool = False) -> List[JobRecord]:
        return self.jobs.list(active_only=active_only)

    def get(self, job_id: str) -> JobRecord:
        job = self.jobs.get(job_id)
        if not job:
            raise NotFound("Job not found")
        return job

    def create(self, fields: JobInput) -> JobRecord:
        job = self.jobs.create(fields.model_dump(),
                               created_by=fields.created_by or self.default_creator)
        logger.info("Job %s created: %s", job.job_id, job.title)
        return job

    def update(self, job_id: str, fields: JobInput) -> JobRecord:
        job = self.jobs.replace(job_id, fields.model_dump())
        if not job:
            raise NotFound("Job not found")
        logger.info("Job %s updated", job_id)
        return job

    def delete(self, job_id: str) -> None:
        outcome = self.jobs.delete(job_id)
        if outcome is None:
            raise NotFound("Job not found")
        if outcome > 0:
            logger.info("Refused to delete job %s: %d application(s)", job_id, outcome)
            raise HasDependents(outcome)
        logger.info("Job %s deleted", job_id)

    def set_active(self, job_id: str, is_active: bool) -> JobRecord:
        job = self.jobs.set_active(job_id, is_active)
        if not job:
            raise NotFound("Job not found")
        logger.info("Job %s %s", job_id, "activated" if is_active else "deactivated")
        return job
