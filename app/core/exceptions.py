"""
HTTP exceptions raised by routers and services.
Every detail is {"code": ..., "message": ...}.
"""
from typing import Optional

from fastapi import HTTPException, status


class AppException(HTTPException):
    code: str = "ERROR"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Unexpected error"

    def __init__(self, message: Optional[str] = None, headers: Optional[dict] = None):
        super().__init__(
            status_code=self.status_code,
            detail={"code": self.code, "message": message or self.message},
            headers=headers,
        )


class MissingFields(AppException):
    code = "MISSING_FIELDS"
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Required fields are missing"


class InvalidRequest(AppException):
    code = "INVALID_REQUEST"
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Request body or parameters are malformed"


class InvalidImageData(AppException):
    code = "INVALID_IMAGE_DATA"
    status_code = status.HTTP_400_BAD_REQUEST
    message = "imageData must be base64-encoded image bytes"


class NotAuthenticated(AppException):
    code = "NOT_AUTHENTICATED"
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Bearer token required"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class InvalidToken(AppException):
    code = "INVALID_TOKEN"
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid bearer token"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class NotFound(AppException):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str = "Resource", message: Optional[str] = None):
        super().__init__(message or f"{resource} not found")


class UpstreamModelError(AppException):
    code = "UPSTREAM_MODEL_ERROR"
    message = "Failed to generate content"


class PersistenceError(AppException):
    code = "PERSISTENCE_ERROR"
    message = "Failed to persist postcard"
