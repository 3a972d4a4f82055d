from typing import Any, Dict, List, Optional

from sqlalchemy import case, func, or_, select
from sqlalchemy.exc import IntegrityError

from domain.errors import DuplicateKey
from infra.db.session import Database
from infra.db.models import ApplicationRecord, JobRecord, utcnow


def _count_status(column, status: str):
    return func.coalesce(func.sum(case((column == status, 1), else_=0)), 0)


class ApplicationsRepository:
    def __init__(self, db: Database):
        self.db = db

    def insert(self, fields: Dict[str, Any]) -> ApplicationRecord:
        rec = ApplicationRecord(
            submitted_at=utcnow(), status="Pending", **fields)
        with self.db.session() as s:
            s.add(rec)
            try:
                s.commit()
            except IntegrityError as exc:
                s.rollback()
                raise DuplicateKey(
                    f"Application {fields.get('application_id')} already exists") from exc
        return rec

    def get(self, application_id: str) -> Optional[ApplicationRecord]:
        with self.db.session() as s:
            return s.get(ApplicationRecord, application_id)

    def search(self, job_id: Optional[str] = None, status: Optional[str] = None,
               search: Optional[str] = None) -> List[ApplicationRecord]:
        stmt = select(ApplicationRecord)
        if job_id:
            stmt = stmt.where(ApplicationRecord.job_id == job_id)
        if status:
            stmt = stmt.where(ApplicationRecord.status == status)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(
                ApplicationRecord.candidate_name.ilike(pattern),
                ApplicationRecord.candidate_email.ilike(pattern),
                ApplicationRecord.job_title.ilike(pattern),
                ApplicationRecord.university.ilike(pattern),
            ))
        stmt = stmt.order_by(ApplicationRecord.submitted_at.desc())
        with self.db.session() as s:
            return list(s.scalars(stmt))

    def set_status(self, application_id: str, status: str,
                   reviewed_by: Optional[str]) -> Optional[ApplicationRecord]:
        with self.db.session() as s:
            rec = s.get(ApplicationRecord, application_id)
            if not rec:
                return None
            rec.status = status
            rec.reviewed_by = reviewed_by
            rec.reviewed_at = utcnow()
            s.commit()
            return rec

    def status_summary(self) -> Dict[str, int]:
        a = ApplicationRecord
        stmt = select(
            func.count(a.application_id),
            _count_status(a.status, "Pending"),
            _count_status(a.status, "Approved"),
            _count_status(a.status, "Rejected"),
        )
        with self.db.session() as s:
            total, pending, approved, rejected = s.execute(stmt).one()
        return {"total": total, "pending": pending,
                "approved": approved, "rejected": rejected}

    def status_by_job(self) -> List[Dict[str, Any]]:
        a, j = ApplicationRecord, JobRecord
        total = func.count(a.application_id)
        stmt = (
            select(
                j.job_id, j.title, total,
                _count_status(a.status, "Pending"),
                _count_status(a.status, "Approved"),
                _count_status(a.status, "Rejected"),
            )
            .outerjoin(a, a.job_id == j.job_id)
            .group_by(j.job_id, j.title)
            .order_by(total.desc())
        )
        with self.db.session() as s:
            rows = s.execute(stmt).all()
        return [
            {"job_id": r[0], "job_title": r[1], "total_applications": r[2],
             "pending": r[3], "approved": r[4], "rejected": r[5]}
            for r in rows
        ]
