"""Service layer modules for the certificate portal API."""

from . import application_service, certificate_service, mail_service

__all__ = [
    "application_service",
    "certificate_service",
    "mail_service",
]
