"""/submit-application endpoint for internship applications."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from portal.errors import ClientInputError
from portal.services import mail_service
from portal.services.application_service import get_application_store
from portal.utils.payload import parse_json_body, require_fields, require_text
from portal.utils.rate_limit import enforce_rate_limit
from portal.utils.sanitize import sanitize_email, sanitize_name, sanitize_phone, sanitize_string

APPLICATION_FIELDS = ("fullName", "email", "phone", "internship", "motivation")

bp = Blueprint("applications", __name__)


@bp.post("/submit-application")
def submit_application():
    """Store an application and notify the admin mailbox."""
    enforce_rate_limit()

    payload = parse_json_body()
    require_fields(payload, APPLICATION_FIELDS)

    email = sanitize_email(payload["email"])
    if email is None:
        raise ClientInputError("Invalid email format")

    phone = sanitize_phone(payload["phone"])
    if phone is None:
        raise ClientInputError("Invalid phone number format")

    application = {
        "fullName": require_text(payload, "fullName", sanitize_name),
        "email": email,
        "phone": phone,
        "internship": require_text(payload, "internship"),
        "experience": sanitize_string(payload.get("experience")),
        "motivation": require_text(payload, "motivation"),
    }

    store = get_application_store()
    application_id = store.save_application(application)
    current_app.logger.info("Application saved (%s): %s", store.mode, application_id)

    # Best-effort; failures are logged inside the mailer
    mail_service.send_application_notification(application)

    return (
        jsonify(
            message=(
                "Application submitted successfully! "
                "We will review your submission and get back to you soon."
            ),
            status="Success",
        ),
        200,
    )
