import re
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from domain.errors import UploadError

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
ALLOWED_MIME_TYPES = {PDF_MIME: "pdf", DOCX_MIME: "docx"}


@dataclass
class ResumeFile:
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


def sanitize(value: str) -> str:
    value = re.sub(r"[^a-zA-Z0-9\s-]", "", value)
    return re.sub(r"\s+", "-", value).lower()


def upload_timestamp(now: datetime) -> str:
    # 2025-12-11T14:40:53.123Z -> 2025-12-11T14-40-53-123Z
    iso = now.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return iso.replace("+00:00", "Z").replace(":", "-").replace(".", "-")


def blob_extension(resume: ResumeFile) -> str:
    ext = resume.filename.rsplit(".", 1)[-1].lower() if "." in resume.filename else ""
    if ext not in ALLOWED_MIME_TYPES.values():
        ext = ALLOWED_MIME_TYPES.get(resume.content_type, "pdf")
    # docx bytes are stored under a .pdf name; kept for compatibility with existing keys
    return "pdf" if ext == "docx" else ext


class ResumeUploader:
    """Validates resume files and writes them to the object store under a derived key."""

    def __init__(self, object_store, max_bytes: int = 5 * 1024 * 1024,
                 append_application_id: bool = False,
                 clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)):
        self.object_store = object_store
        self.max_bytes = max_bytes
        self.append_application_id = append_application_id
        self.clock = clock

    def validate(self, resume: ResumeFile) -> None:
        if resume.size > self.max_bytes:
            limit_mb = self.max_bytes / (1024 * 1024)
            raise UploadError(
                f"File size exceeds {limit_mb:g}MB limit. Please upload a smaller file.",
                status_code=400)
        if resume.content_type not in ALLOWED_MIME_TYPES:
            raise UploadError(
                "Invalid file type. Only PDF and DOCX files are allowed.", status_code=400)

    def object_key(self, timestamp: str, applicant_name: str, job_title: Optional[str],
                   resume: ResumeFile, application_id: Optional[str] = None) -> str:
        stem = f"{timestamp}_{sanitize(applicant_name or '')}_{sanitize(job_title or 'job')}"
        if self.append_application_id and application_id:
            stem = f"{stem}_{application_id}"
        return f"{stem}.{blob_extension(resume)}"

    def store(self, resume: ResumeFile, applicant_name: str, applicant_email: str,
              job_id: Optional[str], application_id: str,
              job_title: Optional[str]) -> str:
        self.validate(resume)
        timestamp = upload_timestamp(self.clock())
        key = self.object_key(timestamp, applicant_name, job_title, resume, application_id)
        metadata = {
            "jobid": job_id or "",
            "applicationid": application_id or "",
            "applicantname": applicant_name or "",
            "applicantemail": applicant_email or "",
            "jobtitle": job_title or "",
            "timestamp": timestamp,
            "originalfilename": resume.filename,
        }
        try:
            self.object_store.put_object(key, resume.data, resume.content_type, metadata)
        except Exception as exc:
            logger.error("Resume upload failed for %s: %s", key, exc)
            raise UploadError(f"Failed to upload resume: {exc}") from exc
        logger.info("Resume uploaded to object store: %s", key)
        return key
