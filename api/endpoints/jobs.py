from typing import List
from fastapi import APIRouter, Depends, status
from api.deps import get_job_directory
from domain.schemas import Job, JobInput, JobMutationResponse, JobPublic, JobStatusUpdate, MessageResponse
from domain.services.job_directory import JobDirectory

router = APIRouter()


@router.get("/jobs", response_model=List[JobPublic])
def list_active_jobs(jobs: JobDirectory = Depends(get_job_directory)):
    return jobs.list(active_only=True)


@router.get("/jobs/all", response_model=List[Job])
def list_all_jobs(jobs: JobDirectory = Depends(get_job_directory)):
    return jobs.list()


@router.get("/jobs/{job_id}", response_model=Job)
def get_job(job_id: str, jobs: JobDirectory = Depends(get_job_directory)):
    return jobs.get(job_id)


@router.post("/jobs", response_model=JobMutationResponse, status_code=status.HTTP_201_CREATED)
def create_job(body: JobInput, jobs: JobDirectory = Depends(get_job_directory)):
    job = jobs.create(body)
    return JobMutationResponse(message="Job created successfully", job=Job.model_validate(job))


@router.put("/jobs/{job_id}", response_model=JobMutationResponse)
def update_job(job_id: str, body: JobInput, jobs: JobDirectory = Depends(get_job_directory)):
    job = jobs.update(job_id, body)
    return JobMutationResponse(message="Job updated successfully", job=Job.model_validate(job))


@router.delete("/jobs/{job_id}", response_model=MessageResponse)
def delete_job(job_id: str, jobs: JobDirectory = Depends(get_job_directory)):
    jobs.delete(job_id)
    return MessageResponse(message="Job deleted successfully")


@router.patch("/jobs/{job_id}/status", response_model=JobMutationResponse)
def set_job_status(job_id: str, body: JobStatusUpdate,
                   jobs: JobDirectory = Depends(get_job_directory)):
    job = jobs.set_active(job_id, body.is_active)
    state = "activated" if body.is_active else "deactivated"
    return JobMutationResponse(message=f"Job {state} successfully", job=Job.model_validate(job))
