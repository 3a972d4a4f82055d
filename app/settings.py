import os
from pydantic import BaseModel
from functools import lru_cache
from dotenv import load_dotenv
load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    APP_NAME: str = os.getenv("APP_NAME", "HireHive Recruitment API")
    ENV: str = os.getenv("ENV", "development")
    API_PREFIX: str = os.getenv("API_PREFIX", "/api")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: list[str] = [
        o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///app.sqlite3")
    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "10"))

    # 'local' writes under STORAGE_DIR, 's3' writes to S3_BUCKET_NAME
    RESUME_STORAGE_TYPE: str = os.getenv("RESUME_STORAGE_TYPE", "local")
    STORAGE_DIR: str = os.getenv("STORAGE_DIR", "storage/resumes")
    S3_BUCKET_NAME: str | None = os.getenv("S3_BUCKET_NAME") or None
    S3_ENDPOINT_URL: str | None = os.getenv("S3_ENDPOINT_URL") or None
    AWS_REGION: str | None = os.getenv("AWS_REGION") or None
    AWS_ACCESS_KEY_ID: str | None = os.getenv("AWS_ACCESS_KEY_ID") or None
    AWS_SECRET_ACCESS_KEY: str | None = os.getenv("AWS_SECRET_ACCESS_KEY") or None

    MAX_RESUME_BYTES: int = int(os.getenv("MAX_RESUME_BYTES", str(5 * 1024 * 1024)))
    RESUME_KEY_APPEND_APPLICATION_ID: bool = _flag("RESUME_KEY_APPEND_APPLICATION_ID", "false")
    ALLOW_STATUS_REDECISION: bool = _flag("ALLOW_STATUS_REDECISION", "true")
    DEFAULT_JOB_CREATOR: str = os.getenv("DEFAULT_JOB_CREATOR", "HR User")

@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
