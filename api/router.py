from fastapi import APIRouter
from api.endpoints.jobs import router as jobs_router
from api.endpoints.applications import router as applications_router
from api.endpoints.health import router as health_router

api_router = APIRouter()
api_router.include_router(jobs_router, tags=["jobs"])
api_router.include_router(applications_router, tags=["applications"])
api_router.include_router(health_router, tags=["health"])
