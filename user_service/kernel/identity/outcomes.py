"""
Result types returned by the identity workflow.

Each operation returns exactly one variant, so "registered and also a
conflict" cannot be expressed.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Conflict:
    """A uniqueness constraint rejected the write."""
    field: str = "phone_number"


@dataclass(frozen=True)
class NotFound:
    """No credential is stored for the given phone number."""


@dataclass(frozen=True)
class WrongCredential:
    """The credential exists but the password does not match."""


@dataclass(frozen=True)
class IssuedToken:
    user_id: int
    token: str
    expires_at: datetime


RegisterOutcome = Union[Success[int], Conflict]
LoginOutcome = Union[Success[IssuedToken], NotFound, WrongCredential]
UpdateOutcome = Union[Success[int], Conflict]
