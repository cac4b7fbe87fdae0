"""
Shape rules for the fields that gate registration and profile updates.

Each rule returns None when the value is acceptable, otherwise one message
(several violations are joined with `` & ``). Full name and phone number
lengths count UTF-8 bytes; password length counts characters.
"""

import unicodedata
from typing import Dict, Optional

FULL_NAME_FIELD = "full_name"
PASSWORD_FIELD = "password"
PHONE_NUMBER_FIELD = "phone_number"

FULL_NAME_MIN_LENGTH = 3
FULL_NAME_MAX_LENGTH = 60

PHONE_NUMBER_MIN_LENGTH = 10
PHONE_NUMBER_MAX_LENGTH = 13
PHONE_NUMBER_PREFIX = "+62"

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 64

MESSAGE_SEPARATOR = " & "

ValidationOutcome = Dict[str, str]


def _byte_length(value: str) -> int:
    return len(value.encode("utf-8"))


def validate_full_name(value: str) -> Optional[str]:
    if not FULL_NAME_MIN_LENGTH <= _byte_length(value) <= FULL_NAME_MAX_LENGTH:
        return (
            f"must be at minimum {FULL_NAME_MIN_LENGTH} characters "
            f"and maximum {FULL_NAME_MAX_LENGTH} characters"
        )
    return None


def validate_phone_number(value: str) -> Optional[str]:
    errors = []
    length = _byte_length(value)

    if not PHONE_NUMBER_MIN_LENGTH <= length <= PHONE_NUMBER_MAX_LENGTH:
        errors.append(
            f"must be minimum {PHONE_NUMBER_MIN_LENGTH} characters "
            f"and maximum {PHONE_NUMBER_MAX_LENGTH} characters"
        )

    # Too short to hold a prefix: only the length rule applies
    if length >= len(PHONE_NUMBER_PREFIX) and not value.startswith(PHONE_NUMBER_PREFIX):
        errors.append(f"must start with the Indonesia country code “{PHONE_NUMBER_PREFIX}”")

    return MESSAGE_SEPARATOR.join(errors) or None


def validate_password(value: str) -> Optional[str]:
    """
    Length 6-64 plus at least one number, one uppercase letter and one
    punctuation or symbol character, classified by Unicode category.
    """
    errors = []
    number = capital = special = False

    for char in value:
        category = unicodedata.category(char)
        if category.startswith("N"):
            number = True
        elif category == "Lu":
            capital = True
        elif category[0] in ("P", "S"):
            special = True

    if not PASSWORD_MIN_LENGTH <= len(value) <= PASSWORD_MAX_LENGTH:
        errors.append(
            f"must be minimum {PASSWORD_MIN_LENGTH} characters "
            f"and maximum {PASSWORD_MAX_LENGTH} characters"
        )

    if not (number and capital and special):
        errors.append(
            "must containing at least 1 capital characters AND 1 number "
            "AND 1 special (non alpha-numeric) characters"
        )

    return MESSAGE_SEPARATOR.join(errors) or None


def validate_registration(phone_number: str, full_name: str, password: str) -> ValidationOutcome:
    """Run every registration rule; an empty mapping means the input is valid."""
    outcome: ValidationOutcome = {}
    checks = (
        (FULL_NAME_FIELD, validate_full_name, full_name),
        (PASSWORD_FIELD, validate_password, password),
        (PHONE_NUMBER_FIELD, validate_phone_number, phone_number),
    )
    for field, rule, value in checks:
        message = rule(value)
        if message:
            outcome[field] = message
    return outcome


def validate_profile_update(
    phone_number: Optional[str] = None,
    full_name: Optional[str] = None,
) -> ValidationOutcome:
    """Check only the fields the caller actually supplied (non-empty)."""
    outcome: ValidationOutcome = {}
    if full_name:
        message = validate_full_name(full_name)
        if message:
            outcome[FULL_NAME_FIELD] = message
    if phone_number:
        message = validate_phone_number(phone_number)
        if message:
            outcome[PHONE_NUMBER_FIELD] = message
    return outcome
