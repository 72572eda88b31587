"""Authentication helpers for the admin bearer-token gate."""

from __future__ import annotations

import hmac
from typing import Any, Optional, Tuple

from flask import current_app, request

from portal.errors import AuthError, error_response

BEARER_PREFIX = "Bearer "
MIN_TOKEN_LENGTH = 10


def require_admin_token() -> Tuple[Optional[str], Optional[Any]]:
    """Check the Bearer token on the request and return it.

    Tokens are opaque: only their presence and minimum length are checked.
    """
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith(BEARER_PREFIX):
        return None, error_response(AuthError())

    token = auth_header[len(BEARER_PREFIX):].strip()
    if len(token) < MIN_TOKEN_LENGTH:
        return None, error_response(AuthError())

    return token, None


def admin_credentials_configured() -> bool:
    config = current_app.config
    return bool(config.get("ADMIN_USERNAME") and config.get("ADMIN_PASSWORD"))


def check_admin_credentials(username: Any, password: Any) -> bool:
    """Compare submitted credentials with the configured admin secrets."""
    config = current_app.config
    expected_username = str(config.get("ADMIN_USERNAME") or "").encode()
    expected_password = str(config.get("ADMIN_PASSWORD") or "").encode()

    # Both comparisons always run
    username_ok = hmac.compare_digest(str(username).encode(), expected_username)
    password_ok = hmac.compare_digest(str(password).encode(), expected_password)
    return username_ok and password_ok
