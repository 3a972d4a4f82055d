import sys
import logging
from typing import Optional, Tuple

from app.settings import settings
from domain.schemas import Application
from infra.db.session import Database, init_db
from infra.repositories.applications_repository import ApplicationsRepository
from infra.storage.object_store import get_object_store

log = logging.getLogger("verify_application")


def verify_application(applications: ApplicationsRepository, store,
                       application_id: str) -> Tuple[Optional[Application], Optional[bool]]:
    """Look up an application row and check its resume object.

    Returns the application (None when the row is missing) and whether its
    resume exists in the store (None when the application has no resume).
    """
    rec = applications.get(application_id)
    if rec is None:
        log.warning(f"Application NOT FOUND: {application_id}")
        return None, None
    application = Application.model_validate(rec)
    log.info(f"Application found: {application_id}")
    for name, value in application.model_dump(by_alias=True).items():
        log.info(f"  {name}: {value}")

    if not application.resume_blob_path:
        log.info("  no resume attached")
        return application, None
    stored = store.exists(application.resume_blob_path)
    if stored:
        log.info(f"Resume found: {application.resume_blob_path}")
    else:
        log.warning(f"Resume NOT FOUND: {application.resume_blob_path}")
    return application, stored


def main(database_url: str, application_id: str) -> int:
    db = Database(database_url, pool_size=1)
    init_db(db)
    try:
        application, stored = verify_application(
            ApplicationsRepository(db), get_object_store(settings), application_id)
    finally:
        db.dispose()
    return 0 if application is not None and stored is not False else 1


if __name__ == "__main__":
    import argparse
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    parser = argparse.ArgumentParser(description="Show an application row and check its resume object")
    parser.add_argument("application_id", help="Application id returned on submission")
    parser.add_argument("--database-url", default=settings.DATABASE_URL,
                        help="SQLAlchemy URL (defaults to DATABASE_URL)")
    args = parser.parse_args()
    sys.exit(main(args.database_url, args.application_id))
