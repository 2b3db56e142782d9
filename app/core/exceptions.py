from typing import Any, Dict, Optional
from fastapi import status


class BaseAPIException(Exception):
    """
    Parent class for every custom error raised by the application.
    Keeps the error body returned to the frontend uniform.
    """
    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

# =========================================================
# 1. COMMON ERRORS
# =========================================================

class NotFoundException(BaseAPIException):
    """404: a referenced student, course or assignment does not exist."""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND
        )

# =========================================================
# 2. STORE ERRORS
# =========================================================

class RecordNotFoundError(NotFoundException):
    """Raised by a store collection when an update targets an unknown identity."""
    def __init__(self, label: str, record_id: str):
        self.record_id = record_id
        super().__init__(message=f"{label} not found")

class StoreValidationError(BaseAPIException):
    """
    Uniqueness or required-field violation reported by the store.
    Surfaced as a 500 with the store's own message.
    """
    def __init__(self, message: str, details: dict = None):
        super().__init__(
            message=message,
            code="STORE_VALIDATION_ERROR",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details
        )
