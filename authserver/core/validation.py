# authserver/core/validation.py

import re
from typing import Any, Mapping
from authserver.core.errors import ValidationError


MIN_USERNAME_LENGTH = 5
MIN_PASSWORD_LENGTH = 5

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@.]+(\.[^\s@.]+)+$")


def _text(payload: Mapping[str, Any], field: str) -> str:
    value = payload.get(field)
    return value if isinstance(value, str) else ""


def validate_signup(payload: Mapping[str, Any]) -> None:
    """
    Checks a signup payload and raises ValidationError for the first rule it breaks.
    Rules are checked in order: name, username, email, password.
    """
    if not _text(payload, "name").strip():
        raise ValidationError("name is missing")

    if len(_text(payload, "username")) < MIN_USERNAME_LENGTH:
        raise ValidationError(f"username should be at least {MIN_USERNAME_LENGTH} characters")

    if not EMAIL_PATTERN.match(_text(payload, "email")):
        raise ValidationError("invalid email")

    if len(_text(payload, "password")) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"password should be at least {MIN_PASSWORD_LENGTH} characters")
