from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from starlette.concurrency import run_in_threadpool
from api.deps import get_application_records, get_application_review
from domain.schemas import (
    Application,
    ApplicationMutationResponse,
    ApplicationStatistics,
    ApplicationStatusUpdate,
    SubmissionResponse,
)
from domain.services.application_records import ApplicationRecordService
from domain.services.application_review import ApplicationReview
from domain.services.resume_uploads import ResumeFile

router = APIRouter()


@router.post("/applications", response_model=SubmissionResponse)
async def submit_application(
    full_name: Optional[str] = Form(default=None, alias="fullName"),
    email: Optional[str] = Form(default=None),
    phone: Optional[str] = Form(default=None),
    cgpa: Optional[str] = Form(default=None),
    university: Optional[str] = Form(default=None),
    experience_years: Optional[str] = Form(default=None, alias="experienceYears"),
    job_id: Optional[str] = Form(default=None, alias="jobId"),
    application_id: Optional[str] = Form(default=None, alias="applicationId"),
    job_title: Optional[str] = Form(default=None, alias="jobTitle"),
    resume_file: Optional[UploadFile] = File(default=None, alias="resumeFile"),
    records: ApplicationRecordService = Depends(get_application_records),
) -> SubmissionResponse:
    fields = {
        "candidate_name": full_name,
        "candidate_email": email,
        "candidate_phone": phone,
        "cgpa": cgpa,
        "university": university,
        "experience_years": experience_years,
        "job_id": job_id,
        "application_id": application_id,
        "job_title": job_title,
    }
    resume = None
    # browsers send an empty part with no filename when nothing was picked
    if resume_file is not None and resume_file.filename:
        resume = ResumeFile(
            filename=resume_file.filename,
            content_type=resume_file.content_type or "",
            data=await resume_file.read(),
        )
    new_id = await run_in_threadpool(records.submit, fields, resume)
    return SubmissionResponse(application_id=new_id)


@router.get("/applications", response_model=List[Application])
def list_applications(review: ApplicationReview = Depends(get_application_review)):
    return review.list_all()


@router.get("/applications/filter", response_model=List[Application])
def filter_applications(
    job_id: Optional[str] = Query(default=None, alias="jobId"),
    status: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    review: ApplicationReview = Depends(get_application_review),
):
    return review.filter(job_id=job_id, status=status, search=search)


@router.get("/applications/stats/summary", response_model=ApplicationStatistics)
def application_statistics(review: ApplicationReview = Depends(get_application_review)):
    return review.statistics()


@router.get("/applications/job/{job_id}", response_model=List[Application])
def list_applications_for_job(job_id: str,
                              review: ApplicationReview = Depends(get_application_review)):
    return review.list_by_job(job_id)


@router.get("/applications/{application_id}", response_model=Application)
def get_application(application_id: str,
                    review: ApplicationReview = Depends(get_application_review)):
    return review.get(application_id)


@router.patch("/applications/{application_id}/status", response_model=ApplicationMutationResponse)
def update_application_status(application_id: str, body: ApplicationStatusUpdate,
                              review: ApplicationReview = Depends(get_application_review)):
    rec = review.update_status(application_id, body.status, body.reviewed_by)
    return ApplicationMutationResponse(
        message=f"Application {rec.status.lower()} successfully",
        application=Application.model_validate(rec),
    )
