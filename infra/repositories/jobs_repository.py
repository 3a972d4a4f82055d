import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select

from infra.db.session import Database
from infra.db.models import JobRecord, ApplicationRecord, utcnow

MUTABLE_FIELDS = (
    "title", "description", "department", "location", "employment_type",
    "salary_range", "requirements", "is_active", "notes",
)


class JobsRepository:
    def __init__(self, db: Database):
        self.db = db

    def list(self, active_only: bool = False) -> List[JobRecord]:
        stmt = select(JobRecord)
        if active_only:
            stmt = stmt.where(JobRecord.is_active.is_(True))
        stmt = stmt.order_by(JobRecord.created_at.desc())
        with self.db.session() as s:
            return list(s.scalars(stmt))

    def get(self, job_id: str) -> Optional[JobRecord]:
        with self.db.session() as s:
            return s.get(JobRecord, job_id)

    def titles(self) -> set:
        with self.db.session() as s:
            return set(s.scalars(select(JobRecord.title)))

    def create(self, fields: Dict[str, Any], created_by: Optional[str]) -> JobRecord:
        now = utcnow()
        job = JobRecord(job_id=str(uuid.uuid4()), created_by=created_by,
                        created_at=now, updated_at=now,
                        **{k: fields.get(k) for k in MUTABLE_FIELDS})
        with self.db.session() as s:
            s.add(job)
            s.commit()
        return job

    def replace(self, job_id: str, fields: Dict[str, Any]) -> Optional[JobRecord]:
        with self.db.session() as s:
            job = s.get(JobRecord, job_id)
            if not job:
                return None
            for k in MUTABLE_FIELDS:
                setattr(job, k, fields.get(k))
            job.updated_at = utcnow()
            s.commit()
            return job

    def set_active(self, job_id: str, is_active: bool) -> Optional[JobRecord]:
        with self.db.session() as s:
            job = s.get(JobRecord, job_id)
            if not job:
                return None
            job.is_active = is_active
            job.updated_at = utcnow()
            s.commit()
            return job

    def delete(self, job_id: str) -> Optional[int]:
        """Delete the job unless applications reference it.

        Returns None when the job does not exist, 0 when it was deleted and the
        number of referencing applications otherwise. Count and delete share one
        transaction and the job row is locked where the backend supports it.
        """
        with self.db.session() as s:
            with s.begin():
                job = s.execute(
                    select(JobRecord).where(JobRecord.job_id == job_id).with_for_update()
                ).scalar_one_or_none()
                if job is None:
                    return None
                count = s.scalar(
                    select(func.count()).select_from(ApplicationRecord)
                    .where(ApplicationRecord.job_id == job_id)
                )
                if count:
                    return count
                s.delete(job)
            return 0
