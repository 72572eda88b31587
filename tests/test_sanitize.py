"""Tests for the input sanitizers and required-field check."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from portal.utils.sanitize import (  # noqa: E402
    generate_secure_token,
    is_valid_participant_name,
    sanitize_certificate_id,
    sanitize_email,
    sanitize_name,
    sanitize_phone,
    sanitize_string,
    validate_required_fields,
)


def test_sanitize_string_strips_markup_and_handlers():
    raw = '  <img src=x onerror=alert(1)> JavaScript:void(0) hello '
    cleaned = sanitize_string(raw)

    assert "<" not in cleaned and ">" not in cleaned
    assert "onerror=" not in cleaned
    assert "javascript:" not in cleaned.lower()
    assert cleaned.endswith("hello")


def test_sanitize_string_truncates_and_rejects_non_strings():
    assert len(sanitize_string("x" * 5000)) == 1000
    assert sanitize_string(None) == ""
    assert sanitize_string(42) == ""


def test_sanitize_email():
    assert sanitize_email("  Jane.Doe@Example.COM ") == "jane.doe@example.com"
    assert sanitize_email("not-an-email") is None
    assert sanitize_email("a@b") is None
    assert sanitize_email(["a@b.c"]) is None


def test_sanitize_phone():
    assert sanitize_phone("+1 (555) 123-4567") == "+1 (555) 123-4567"
    assert sanitize_phone("555.123.4567") == "5551234567"
    assert sanitize_phone("123-456") is None
    assert sanitize_phone(5551234567) is None


@pytest.mark.parametrize("certificate_id", ["PVI-2024-001", "ABC-1999-999", "XYZ-0000-000"])
def test_sanitize_certificate_id_accepts_valid_format(certificate_id):
    assert sanitize_certificate_id(certificate_id) == certificate_id
    assert sanitize_certificate_id(f"  {certificate_id.lower()} ") == certificate_id


@pytest.mark.parametrize(
    "certificate_id",
    ["", "PVI-2024-01", "PV-2024-001", "PVI2024001", "PVI-24-001", "PVI-2024-0011", "P1I-2024-001", None],
)
def test_sanitize_certificate_id_rejects_everything_else(certificate_id):
    assert sanitize_certificate_id(certificate_id) is None


def test_sanitize_name():
    assert sanitize_name("  Anne-Marie O'Neil3 ") == "Anne-Marie O'Neil"
    assert len(sanitize_name("a" * 300)) == 100
    assert sanitize_name(None) == ""


def test_participant_name_rule():
    assert is_valid_participant_name("john doe")
    assert not is_valid_participant_name("J")
    assert not is_valid_participant_name("John D0e")


def test_validate_required_fields_reports_missing_and_blank():
    result = validate_required_fields(
        {"fullName": "Jane", "email": "   ", "phone": None, "count": 0},
        ["fullName", "email", "phone", "motivation", "count"],
    )

    assert result.is_valid is False
    assert result.missing_fields == ["email", "phone", "motivation"]


def test_validate_required_fields_all_present():
    result = validate_required_fields({"a": "x", "b": "y"}, ["a", "b"])
    assert result.is_valid is True
    assert result.missing_fields == []


def test_generate_secure_token():
    token = generate_secure_token()
    assert len(token) == 64
    assert token != generate_secure_token()


def test_non_ascii_digits_are_rejected():
    assert sanitize_certificate_id("PVI-٢٠٢٤-001") is None
    assert sanitize_phone("١٢٣٤٥٦٧٨٩٠") is None
    assert sanitize_phone("555-123-4567 ١٢") == "555-123-4567 "
