from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.settings import Settings, settings as default_settings
from app.error_handlers import attach_error_handlers
from api.router import api_router
from domain.services.application_records import ApplicationRecordService
from domain.services.application_review import ApplicationReview
from domain.services.job_directory import JobDirectory
from domain.services.resume_uploads import ResumeUploader
from infra.db.session import Database, init_db
from infra.repositories.applications_repository import ApplicationsRepository
from infra.repositories.jobs_repository import JobsRepository
from infra.storage.object_store import get_object_store


def create_app(settings: Settings | None = None, object_store=None) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(title=settings.APP_NAME)

    db = Database(settings.DATABASE_URL, pool_size=settings.DB_POOL_SIZE)
    init_db(db)
    if object_store is None:
        object_store = get_object_store(settings)

    jobs_repo = JobsRepository(db)
    applications_repo = ApplicationsRepository(db)
    uploader = ResumeUploader(
        object_store,
        max_bytes=settings.MAX_RESUME_BYTES,
        append_application_id=settings.RESUME_KEY_APPEND_APPLICATION_ID,
    )

    app.state.settings = settings
    app.state.db = db
    app.state.object_store = object_store
    app.state.job_directory = JobDirectory(jobs_repo, default_creator=settings.DEFAULT_JOB_CREATOR)
    app.state.application_records = ApplicationRecordService(applications_repo, jobs_repo, uploader)
    app.state.application_review = ApplicationReview(
        applications_repo, allow_redecision=settings.ALLOW_STATUS_REDECISION)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    attach_error_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app
