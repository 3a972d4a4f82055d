from typing import Any, Dict


class RecruitmentError(Exception):
    """Base for errors that are answered with a JSON body and an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message}


class ValidationError(RecruitmentError):
    status_code = 400


class InvalidStatus(ValidationError):
    pass


class NotFound(RecruitmentError):
    status_code = 404


class HasDependents(RecruitmentError):
    status_code = 400

    def __init__(self, count: int):
        super().__init__(
            f"Cannot delete job. There are {count} application(s) associated with this job.")
        self.count = count

    def to_body(self) -> Dict[str, Any]:
        body = super().to_body()
        body["applicationCount"] = self.count
        return body


class StatusAlreadyDecided(RecruitmentError):
    status_code = 409


class DuplicateKey(RecruitmentError):
    status_code = 500


class UploadError(RecruitmentError):
    # rejected files are the caller's fault, store failures are ours
    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class StoreUnavailable(RecruitmentError):
    status_code = 500
