"""Validation and normalization of user create/update payloads."""

import re
import string
from collections.abc import Mapping
from typing import Any

from src.directory.core.security import sanitize_input
from src.directory.core.types import Gender

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[\d\s\-()]+$", re.ASCII)
MIN_NAME_LENGTH = 2
MIN_PHONE_DIGITS = 10

USER_FIELDS: tuple[str, ...] = ("first_name", "last_name", "email", "gender", "phone")

FIRST_NAME_ERROR = "First name is required and must be at least 2 characters"
LAST_NAME_ERROR = "Last name is required and must be at least 2 characters"
EMAIL_ERROR = "Valid email is required"
GENDER_ERROR = "Gender must be MALE, FEMALE, or OTHER"
PHONE_ERROR = "Valid phone number is required (at least 10 digits)"


def is_valid_email(email: Any) -> bool:
    return isinstance(email, str) and EMAIL_PATTERN.match(email) is not None


def is_valid_phone(phone: Any) -> bool:
    if not isinstance(phone, str) or not PHONE_PATTERN.match(phone):
        return False
    return sum(ch in string.digits for ch in phone) >= MIN_PHONE_DIGITS


def _is_valid_name(name: Any) -> bool:
    return isinstance(name, str) and len(sanitize_input(name)) >= MIN_NAME_LENGTH


_CHECKS = (
    ("first_name", _is_valid_name, FIRST_NAME_ERROR),
    ("last_name", _is_valid_name, LAST_NAME_ERROR),
    ("email", is_valid_email, EMAIL_ERROR),
    ("gender", lambda value: Gender.parse(value) is not None, GENDER_ERROR),
    ("phone", is_valid_phone, PHONE_ERROR),
)


def validate_user_data(data: Mapping[str, Any], is_update: bool = False) -> list[str]:
    """Collect validation messages for a payload.

    On create every field is required. On update only the keys present in
    ``data`` are checked; an explicit ``None`` counts as present.
    """
    errors = []
    for field, check, message in _CHECKS:
        if is_update and field not in data:
            continue
        if not check(data.get(field)):
            errors.append(message)
    return errors


def normalize_user_data(data: Mapping[str, Any]) -> dict[str, Any]:
    """Sanitize already-validated fields into their stored form.

    Names and phone are trimmed and stripped of angle brackets, email is
    additionally lower-cased and gender upper-cased.
    """
    normalized: dict[str, Any] = {}
    for field in USER_FIELDS:
        if field not in data:
            continue
        value = data[field]
        if field == "email":
            normalized[field] = sanitize_input(value).lower()
        elif field == "gender":
            normalized[field] = Gender.parse(value).value
        else:
            normalized[field] = sanitize_input(value)
    return normalized
