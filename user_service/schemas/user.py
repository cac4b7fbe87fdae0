"""
Registration, login and profile schemas.

Registration and login fields default to empty strings so that shape problems
are reported by the field validators, with their messages, instead of by
request parsing.
"""

from typing import Optional

from pydantic import BaseModel


class RegistrationRequest(BaseModel):
    """User registration request."""
    
    phone_number: str = ""
    full_name: str = ""
    password: str = ""


class RegistrationResponse(BaseModel):
    """Id of the newly registered user, as a string."""
    
    id: str


class LoginRequest(BaseModel):
    """User login request."""
    
    phone_number: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    """Successful login."""
    
    message: str = "Login success"
    token: str


class ProfileResponse(BaseModel):
    """User profile response."""
    
    phone_number: str
    full_name: str


class ProfileUpdateRequest(BaseModel):
    """Profile update; empty or null fields keep their current value."""
    
    phone_number: Optional[str] = None
    full_name: Optional[str] = None
