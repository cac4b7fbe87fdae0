"""
Pydantic request and response schemas.
"""

from user_service.schemas.common import (
    ErrorResponse,
    FieldError,
    HealthResponse,
    SuccessResponse,
    ValidationErrorResponse,
)
from user_service.schemas.user import (
    LoginRequest,
    LoginResponse,
    ProfileResponse,
    ProfileUpdateRequest,
    RegistrationRequest,
    RegistrationResponse,
)

__all__ = [
    "ErrorResponse",
    "FieldError",
    "HealthResponse",
    "SuccessResponse",
    "ValidationErrorResponse",
    "LoginRequest",
    "LoginResponse",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "RegistrationRequest",
    "RegistrationResponse",
]
