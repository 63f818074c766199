from typing import Any, Dict, Optional
from fastapi import status


class BaseAPIException(Exception):
    """
    Parent class for every custom error in the system.
    Keeps the error payload returned to the browser in one format.
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

class BadRequestException(BaseAPIException):
    """400: invalid request (bad logic, missing parameters...)"""
    def __init__(self, message: str = "Bad Request", details: dict = None, code: str = "BAD_REQUEST"):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )

class NotFoundException(BaseAPIException):
    """404: resource not found"""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND
        )

# =========================================================
# 2. STUDENT RECORD ERRORS
# =========================================================

class StudentValidationError(BadRequestException):
    """
    400: a submitted student form is missing required fields.
    `details` maps each offending field to a message.
    """
    def __init__(self, details: Dict[str, str], message: str = "All fields are required."):
        super().__init__(
            message=message,
            details=details,
            code="VALIDATION_ERROR"
        )

class StorageError(BaseAPIException):
    """
    500: the record document could not be read or written.
    Caught and logged by the store; the app keeps serving from memory.
    """
    def __init__(self, message: str):
        super().__init__(
            message=f"Storage Error: {message}",
            code="STORAGE_ERROR",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

class UploadError(BaseAPIException):
    """
    500: an uploaded file could not be written to the upload directory.
    Surfaced to the user on create/edit.
    """
    def __init__(self, message: str, details: dict = None):
        super().__init__(
            message=message,
            code="UPLOAD_ERROR",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details
        )
