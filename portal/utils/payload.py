"""Request body parsing shared by the JSON endpoints."""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable

from flask import request

from portal.errors import ClientInputError
from portal.utils.sanitize import sanitize_string, validate_required_fields


def parse_json_body() -> Dict[str, Any]:
    """Return the request's JSON object, rejecting anything else with a 400."""
    payload = request.get_json(force=True, silent=True)
    if not isinstance(payload, dict):
        raise ClientInputError("Request body must be a JSON object.")
    return payload


def require_fields(payload: Dict[str, Any], fields: Iterable[str]) -> None:
    """Raise a 400 naming the first missing field."""
    result = validate_required_fields(payload, fields)
    if not result.is_valid:
        raise ClientInputError(
            f"Missing required field: {result.missing_fields[0]}",
            missingFields=result.missing_fields,
        )


def require_text(
    payload: Dict[str, Any],
    field: str,
    sanitizer: Callable[[Any], str] = sanitize_string,
) -> str:
    """Sanitize a required free-text field, rejecting it if nothing usable remains."""
    value = sanitizer(payload.get(field))
    if not value:
        raise ClientInputError(f"Invalid value for field: {field}", invalidField=field)
    return value
