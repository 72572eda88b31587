"""/sendMail endpoint for the public contact form."""

from __future__ import annotations

from flask import Blueprint, jsonify

from portal.errors import ClientInputError
from portal.services import mail_service
from portal.utils.payload import parse_json_body, require_fields, require_text
from portal.utils.rate_limit import enforce_rate_limit
from portal.utils.sanitize import sanitize_email, sanitize_name, sanitize_phone

CONTACT_FIELDS = ("name", "eaddress", "phone", "message")

bp = Blueprint("contact", __name__)


@bp.post("/sendMail")
def send_mail():
    enforce_rate_limit()

    payload = parse_json_body()
    require_fields(payload, CONTACT_FIELDS)

    email = sanitize_email(payload["eaddress"])
    if email is None:
        raise ClientInputError("Invalid email format")

    phone = sanitize_phone(payload["phone"])
    if phone is None:
        raise ClientInputError("Invalid phone number format")

    mail_service.send_contact_notification(
        {
            "name": require_text(payload, "name", sanitize_name),
            "email": email,
            "phone": phone,
            "message": require_text(payload, "message"),
        }
    )

    return (
        jsonify(message="Message sent successfully! We will get back to you soon.", status="Success"),
        200,
    )
