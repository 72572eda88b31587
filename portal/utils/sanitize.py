"""Input sanitization and validation helpers shared by every handler.

Sanitizers that can reject a value return ``None`` for invalid input, so an
absent field and a value that failed validation are never confused. Free-text
sanitizers always succeed and may return an empty string.
"""

from __future__ import annotations

import re
import secrets
from typing import Any, Iterable, List, Mapping, NamedTuple, Optional

MAX_STRING_LENGTH = 1000
MAX_NAME_LENGTH = 100
MIN_PHONE_DIGITS = 10

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
CERTIFICATE_ID_PATTERN = re.compile(r"^[A-Z]{3}-\d{4}-\d{3}$", re.ASCII)
PARTICIPANT_NAME_PATTERN = re.compile(r"^[a-zA-Z\s]{2,50}$")

_ANGLE_BRACKETS = re.compile(r"[<>]")
_JAVASCRIPT_PROTOCOL = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"on\w+=", re.IGNORECASE)
_PHONE_DISALLOWED = re.compile(r"[^\d+\-()\s]", re.ASCII)
_NON_DIGITS = re.compile(r"\D", re.ASCII)
_NAME_DISALLOWED = re.compile(r"[^a-zA-Z\s\-']")


class RequiredFieldsResult(NamedTuple):
    is_valid: bool
    missing_fields: List[str]


def sanitize_string(value: Any) -> str:
    """Strip markup-ish content from free text and cap its length."""
    if not isinstance(value, str):
        return ""

    cleaned = _ANGLE_BRACKETS.sub("", value.strip())
    cleaned = _JAVASCRIPT_PROTOCOL.sub("", cleaned)
    cleaned = _EVENT_HANDLER.sub("", cleaned)
    return cleaned[:MAX_STRING_LENGTH]


def sanitize_email(value: Any) -> Optional[str]:
    """Return the normalized email address, or ``None`` when it is malformed."""
    if not isinstance(value, str):
        return None

    email = value.strip().lower()
    return email if EMAIL_PATTERN.match(email) else None


def sanitize_phone(value: Any) -> Optional[str]:
    """Return the phone number with stray characters removed, or ``None`` when too short."""
    if not isinstance(value, str):
        return None

    phone = _PHONE_DISALLOWED.sub("", value)
    digits = _NON_DIGITS.sub("", phone)
    return phone if len(digits) >= MIN_PHONE_DIGITS else None


def sanitize_certificate_id(value: Any) -> Optional[str]:
    """Return an uppercased ``XXX-YYYY-NNN`` certificate id, or ``None``."""
    if not isinstance(value, str):
        return None

    certificate_id = value.strip().upper()
    return certificate_id if CERTIFICATE_ID_PATTERN.match(certificate_id) else None


def sanitize_name(value: Any) -> str:
    """Keep letters, spaces, hyphens and apostrophes."""
    if not isinstance(value, str):
        return ""

    return _NAME_DISALLOWED.sub("", value.strip())[:MAX_NAME_LENGTH]


def is_valid_participant_name(value: str) -> bool:
    return bool(PARTICIPANT_NAME_PATTERN.match(value))


def validate_required_fields(data: Mapping[str, Any], fields: Iterable[str]) -> RequiredFieldsResult:
    """Report which of ``fields`` are absent or blank in ``data``."""
    missing: List[str] = []
    for field in fields:
        value = data.get(field)
        if value is None or str(value).strip() == "":
            missing.append(field)

    return RequiredFieldsResult(is_valid=not missing, missing_fields=missing)


def generate_secure_token() -> str:
    """Return 32 random bytes encoded as hex."""
    return secrets.token_hex(32)
