import logging
from typing import Dict, List, Optional

from domain.errors import InvalidStatus, NotFound, StatusAlreadyDecided
from domain.schemas import DECISION_STATUSES
from infra.db.models import ApplicationRecord
from infra.repositories.applications_repository import ApplicationsRepository

logger = logging.getLogger(__name__)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class ApplicationReview:
    """HR-side reads and decisions over submitted applications.

    Status moves Pending -> Approved or Pending -> Rejected. Whether a decided
    application may be decided again is controlled by ``allow_redecision``;
    when it is on, an update simply overwrites the current status.
    """

    def __init__(self, applications: ApplicationsRepository, allow_redecision: bool = True):
        self.applications = applications
        self.allow_redecision = allow_redecision

    def list_all(self) -> List[ApplicationRecord]:
        return self.applications.search()

    def list_by_job(self, job_id: str) -> List[ApplicationRecord]:
        return self.applications.search(job_id=job_id)

    def get(self, application_id: str) -> ApplicationRecord:
        rec = self.applications.get(application_id)
        if not rec:
            raise NotFound("Application not found")
        return rec

    def filter(self, job_id: Optional[str] = None, status: Optional[str] = None,
               search: Optional[str] = None) -> List[ApplicationRecord]:
        return self.applications.search(
            job_id=_clean(job_id), status=_clean(status), search=_clean(search))

    def update_status(self, application_id: str, status: Optional[str],
                      reviewed_by: Optional[str] = None) -> ApplicationRecord:
        if status not in DECISION_STATUSES:
            raise InvalidStatus("Invalid status. Must be either: Approved or Rejected")
        current = self.get(application_id)
        if not self.allow_redecision and current.status != "Pending":
            raise StatusAlreadyDecided(
                f"Application has already been {current.status.lower()}")
        rec = self.applications.set_status(application_id, status, _clean(reviewed_by))
        if not rec:
            raise NotFound("Application not found")
        logger.info("Application %s: %s -> %s", application_id, current.status, status)
        return rec

    def statistics(self) -> Dict:
        return {
            "summary": self.applications.status_summary(),
            "by_job": self.applications.status_by_job(),
        }
