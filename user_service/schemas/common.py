"""
Common schema types used across the API.
"""

from typing import List, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response."""
    
    detail: str
    request_id: Optional[str] = None


class SuccessResponse(BaseModel):
    """Standard success response."""
    
    message: str


class FieldError(BaseModel):
    """One rejected input field."""
    
    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    """Field-level validation failures."""
    
    detail: str = "Validation error"
    errors: List[FieldError]
    
    @classmethod
    def from_outcome(cls, outcome: dict[str, str]) -> "ValidationErrorResponse":
        return cls(errors=[FieldError(field=k, message=v) for k, v in outcome.items()])


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str
    version: str
