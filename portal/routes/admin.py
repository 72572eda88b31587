"""Admin login and database diagnostics."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from portal.errors import UpstreamUnavailable
from portal.services.certificate_service import get_certificate_store
from portal.utils.auth import admin_credentials_configured, check_admin_credentials
from portal.utils.payload import parse_json_body
from portal.utils.rate_limit import enforce_rate_limit
from portal.utils.sanitize import generate_secure_token, validate_required_fields

bp = Blueprint("admin", __name__)


@bp.post("/admin-auth")
def admin_auth():
    """Exchange the admin username/password for an opaque session token."""
    enforce_rate_limit()

    payload = parse_json_body()
    if not validate_required_fields(payload, ("username", "password")).is_valid:
        return jsonify(success=False, error="Username and password are required"), 400

    if not admin_credentials_configured():
        current_app.logger.error("Admin credentials not configured")
        return jsonify(success=False, error="Admin authentication not configured"), 500

    if not check_admin_credentials(payload["username"], payload["password"]):
        current_app.logger.warning("Rejected admin login attempt")
        return jsonify(success=False, error="Invalid username or password"), 401

    return (
        jsonify(
            success=True,
            message="Authentication successful",
            sessionToken=generate_secure_token(),
        ),
        200,
    )


@bp.get("/test-db")
def database_diagnostics():
    """Report whether the certificate database is reachable."""
    config = current_app.config
    env_vars = {
        "hasMongoUri": bool(config.get("MONGODB_URI")),
        "hasAdminUsername": bool(config.get("ADMIN_USERNAME")),
        "hasAdminPassword": bool(config.get("ADMIN_PASSWORD")),
    }

    store = get_certificate_store()
    if store.mode == "mock":
        return (
            jsonify(
                status="error",
                message="MONGODB_URI environment variable is not set",
                mode=store.mode,
                envVars=env_vars,
            ),
            200,
        )

    try:
        count = store.count()
    except UpstreamUnavailable:
        return (
            jsonify(
                status="error",
                message="Database connection failed",
                mode=store.mode,
                envVars=env_vars,
            ),
            500,
        )

    return (
        jsonify(
            status="success",
            message="Database connection successful",
            mode=store.mode,
            certificateCount=count,
            envVars=env_vars,
        ),
        200,
    )
