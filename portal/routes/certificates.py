"""Certificate endpoints: admin add/list and public verification."""

from __future__ import annotations

from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

from portal.errors import ClientInputError, NotFoundError
from portal.services.certificate_service import (
    get_certificate_store,
    public_certificate,
    serialize_certificate,
)
from portal.utils.auth import require_admin_token
from portal.utils.payload import parse_json_body, require_fields, require_text
from portal.utils.rate_limit import client_identifier, enforce_rate_limit
from portal.utils.sanitize import (
    is_valid_participant_name,
    sanitize_certificate_id,
    sanitize_string,
)

CERTIFICATE_FIELDS = ("certificateId", "participantName", "program", "completionDate")
VERIFY_FIELDS = ("certificateId", "participantName")

CERTIFICATE_ID_FORMAT_ERROR = "Certificate ID must be in format: XXX-YYYY-NNN (e.g., PVI-2024-001)"
PARTICIPANT_NAME_FORMAT_ERROR = (
    "Participant name must be 2-50 characters and contain only letters and spaces"
)
NOT_FOUND_MESSAGE = (
    "Certificate not found or invalid. Please check the certificate ID and participant name."
)

bp = Blueprint("certificates", __name__)


def _certificate_id_or_400(value) -> str:
    certificate_id = sanitize_certificate_id(value)
    if certificate_id is None:
        raise ClientInputError(CERTIFICATE_ID_FORMAT_ERROR)
    return certificate_id


@bp.post("/add-certificate")
def add_certificate():
    """Issue a new certificate (admin only)."""
    _, error_response = require_admin_token()
    if error_response is not None:
        return error_response

    payload = parse_json_body()
    require_fields(payload, CERTIFICATE_FIELDS)
    certificate_id = _certificate_id_or_400(payload["certificateId"])

    certificate = {
        "certificateId": certificate_id,
        "participantName": require_text(payload, "participantName"),
        "program": require_text(payload, "program"),
        "completionDate": require_text(payload, "completionDate"),
        "issuedDate": sanitize_string(payload.get("issuedDate")) or None,
        "status": sanitize_string(payload.get("status")) or None,
    }

    store = get_certificate_store()
    inserted_id = store.add_certificate(certificate)
    current_app.logger.info("Certificate added (%s): %s -> %s", store.mode, certificate_id, inserted_id)

    return (
        jsonify(
            message="Certificate added successfully!",
            certificateId=certificate_id,
            participantName=certificate["participantName"],
            id=inserted_id,
            mode=store.mode,
            status="Success",
        ),
        200,
    )


@bp.get("/list-certificates")
def list_certificates():
    """Return every stored certificate, newest first (admin only)."""
    _, error_response = require_admin_token()
    if error_response is not None:
        return error_response

    store = get_certificate_store()
    certificates = [serialize_certificate(doc) for doc in store.list_certificates()]

    return (
        jsonify(
            certificates=certificates,
            total=len(certificates),
            message=f"Found {len(certificates)} certificate(s)",
            mode=store.mode,
        ),
        200,
    )


@bp.post("/verify-certificate")
def verify_certificate():
    """Check a certificate id against the holder's name."""
    enforce_rate_limit()

    payload = parse_json_body()
    require_fields(payload, VERIFY_FIELDS)
    certificate_id = _certificate_id_or_400(payload["certificateId"])

    participant_name = str(payload["participantName"]).strip()
    if not is_valid_participant_name(participant_name):
        raise ClientInputError(PARTICIPANT_NAME_FORMAT_ERROR)

    store = get_certificate_store()
    certificate = store.verify_certificate(certificate_id, participant_name)

    current_app.logger.info(
        "Certificate verification attempt: id=%s name=%r ip=%s found=%s at=%s",
        certificate_id,
        participant_name,
        client_identifier(),
        certificate is not None,
        datetime.now(timezone.utc).isoformat(),
    )

    if certificate is None:
        organization = current_app.config.get("ORGANIZATION_NAME", "")
        raise NotFoundError(
            NOT_FOUND_MESSAGE,
            verified=False,
            suggestions=[
                "Verify the certificate ID is correct",
                "Ensure the participant name matches exactly",
                f"Check that the certificate is from {organization}",
                "Contact support if you believe this is an error",
            ],
        )

    message = "Certificate verified successfully!"
    if store.mode == "mock":
        message += " (Mock data)"

    return (
        jsonify(
            status="Success",
            verified=True,
            certificate=public_certificate(certificate),
            message=message,
            mode=store.mode,
        ),
        200,
    )
