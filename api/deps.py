from fastapi import Request

from domain.services.application_records import ApplicationRecordService
from domain.services.application_review import ApplicationReview
from domain.services.job_directory import JobDirectory
from infra.db.session import Database


def get_database(request: Request) -> Database:
    return request.app.state.db


def get_job_directory(request: Request) -> JobDirectory:
    return request.app.state.job_directory


def get_application_records(request: Request) -> ApplicationRecordService:
    return request.app.state.application_records


def get_application_review(request: Request) -> ApplicationReview:
    return request.app.state.application_review


def get_object_store(request: Request):
    return request.app.state.object_store
