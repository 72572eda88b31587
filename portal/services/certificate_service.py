"""Certificate persistence behind a store selected at application start.

``MongoCertificateStore`` is used whenever ``MONGODB_URI`` is configured;
otherwise ``InMemoryCertificateStore`` serves the static mock certificates and
keeps new additions in process memory only.
"""

from __future__ import annotations

import logging
import re
import threading
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional

from flask import Flask, current_app
from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection
from pymongo.errors import ConnectionFailure, DuplicateKeyError

from portal import database
from portal.errors import ConflictError, UpstreamUnavailable
from portal.storage import MOCK_CERTIFICATES

_LOGGER = logging.getLogger(__name__)

CERTIFICATES_COLLECTION = "certificates"
DEFAULT_STATUS = "valid"
DUPLICATE_MESSAGE = "Certificate ID already exists"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _isoformat(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


@contextmanager
def upstream_guard(action: str):
    """Translate connectivity failures from pymongo into ``UpstreamUnavailable``."""
    try:
        yield
    except ConnectionFailure as exc:
        _LOGGER.error("Database unreachable while trying to %s: %s", action, exc)
        raise UpstreamUnavailable() from exc


def serialize_certificate(document: Dict[str, Any]) -> Dict[str, Any]:
    """Shape a stored certificate for the admin listing."""
    return {
        "id": str(document.get("_id", "")),
        "certificateId": document.get("certificateId"),
        "participantName": document.get("participantName"),
        "program": document.get("program"),
        "completionDate": document.get("completionDate"),
        "issuedDate": _isoformat(document.get("issuedDate")),
        "status": document.get("status"),
        "createdAt": _isoformat(document.get("createdAt")),
    }


def public_certificate(document: Dict[str, Any]) -> Dict[str, Any]:
    """Shape a certificate for the public verification response."""
    return {
        "id": document.get("certificateId"),
        "participantName": document.get("participantName"),
        "program": document.get("program"),
        "completionDate": document.get("completionDate"),
        "status": document.get("status"),
        "issuedDate": _isoformat(document.get("issuedDate")),
    }


class CertificateStore:
    """Interface shared by the persistent and mock certificate stores."""

    mode = ""

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock

    def _build_document(self, data: Dict[str, Any]) -> Dict[str, Any]:
        now = self._clock()
        return {
            "certificateId": data["certificateId"],
            "participantName": data["participantName"],
            "program": data["program"],
            "completionDate": data["completionDate"],
            "issuedDate": data.get("issuedDate") or now,
            "status": data.get("status") or DEFAULT_STATUS,
            "createdAt": now,
            "updatedAt": now,
        }

    def add_certificate(self, data: Dict[str, Any]) -> str:
        """Insert a certificate, raising ``ConflictError`` if its id is taken."""
        raise NotImplementedError

    def list_certificates(self) -> List[Dict[str, Any]]:
        """Return every certificate, newest first."""
        raise NotImplementedError

    def verify_certificate(self, certificate_id: str, participant_name: str) -> Optional[Dict[str, Any]]:
        """Find a certificate by exact id whose holder name contains ``participant_name``."""
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError


class MongoCertificateStore(CertificateStore):
    mode = "database"

    def _collection(self) -> Collection:
        return database.get_database()[CERTIFICATES_COLLECTION]

    def create_indexes(self) -> None:
        """Create the unique certificate id index and the listing index."""
        collection = self._collection()
        with upstream_guard("create certificate indexes"):
            collection.create_index([("certificateId", ASCENDING)], unique=True)
            collection.create_index([("createdAt", DESCENDING)])

    def add_certificate(self, data: Dict[str, Any]) -> str:
        document = self._build_document(data)
        collection = self._collection()
        with upstream_guard("add a certificate"):
            # The unique index makes this a single insert-if-absent
            try:
                result = collection.insert_one(document)
            except DuplicateKeyError as exc:
                raise ConflictError(DUPLICATE_MESSAGE) from exc
        return str(result.inserted_id)

    def list_certificates(self) -> List[Dict[str, Any]]:
        with upstream_guard("list certificates"):
            return list(self._collection().find({}).sort("createdAt", DESCENDING))

    def verify_certificate(self, certificate_id: str, participant_name: str) -> Optional[Dict[str, Any]]:
        query = {
            "certificateId": certificate_id,
            "participantName": {"$regex": re.escape(participant_name), "$options": "i"},
        }
        with upstream_guard("verify a certificate"):
            return self._collection().find_one(query)

    def count(self) -> int:
        with upstream_guard("count certificates"):
            return self._collection().count_documents({})


class InMemoryCertificateStore(CertificateStore):
    """Mock-mode store. Nothing is persisted.

    The example certificates are only consulted for verification and listing;
    ids are unique among the certificates added to this process.
    """

    mode = "mock"

    def __init__(
        self,
        seed: Iterable[Dict[str, Any]] = MOCK_CERTIFICATES,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        super().__init__(clock)
        self._lock = threading.Lock()
        self._examples: Dict[str, Dict[str, Any]] = {}
        self._added: Dict[str, Dict[str, Any]] = {}
        for record in seed:
            document = dict(record)
            document.setdefault("_id", uuid.uuid4().hex)
            self._examples[document["certificateId"]] = document

    def add_certificate(self, data: Dict[str, Any]) -> str:
        document = self._build_document(data)
        document["_id"] = uuid.uuid4().hex
        with self._lock:
            if document["certificateId"] in self._added:
                raise ConflictError(DUPLICATE_MESSAGE)
            self._added[document["certificateId"]] = document
        return document["_id"]

    def list_certificates(self) -> List[Dict[str, Any]]:
        with self._lock:
            records = [dict(record) for record in self._added.values()]
        records.extend(dict(record) for record in self._examples.values())
        return sorted(records, key=lambda record: record["createdAt"], reverse=True)

    def verify_certificate(self, certificate_id: str, participant_name: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            added = self._added.get(certificate_id)
        for record in (added, self._examples.get(certificate_id)):
            if record and participant_name.lower() in record["participantName"].lower():
                return dict(record)
        return None

    def count(self) -> int:
        with self._lock:
            return len(self._added) + len(self._examples)


def create_certificate_store(config: Dict[str, Any]) -> CertificateStore:
    """Pick the store implementation from the app configuration."""
    if config.get("MONGODB_URI"):
        return MongoCertificateStore()
    return InMemoryCertificateStore()


def init_app(app: Flask) -> None:
    store = create_certificate_store(app.config)
    app.extensions["certificate_store"] = store
    if store.mode == "mock":
        app.logger.warning("MONGODB_URI is not set; certificates are served from mock data")


def get_certificate_store() -> CertificateStore:
    return current_app.extensions["certificate_store"]
