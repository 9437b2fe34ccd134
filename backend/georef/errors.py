# backend/georef/errors.py
from typing import Optional

from georef.schemas.commons import ErrorOut


class ApiError(Exception):
    """Failure surfaced to the caller as {success: false, error, details?}."""

    status_code = 500

    def __init__(self, error: str, details: Optional[str] = None):
        super().__init__(error)
        self.error = error
        self.details = details

    def to_payload(self) -> dict:
        return ErrorOut(error=self.error, details=self.details).model_dump(exclude_none=True)


class ClientInputError(ApiError):
    status_code = 400


class NotFoundError(ApiError):
    status_code = 404


class PayloadTooLargeError(ApiError):
    status_code = 413


class UpstreamError(ApiError):
    status_code = 502


class InternalError(ApiError):
    status_code = 500
