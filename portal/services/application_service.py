"""Storage for internship applications."""

from __future__ import annotations

import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

from flask import Flask, current_app

from portal import database
from portal.services.certificate_service import upstream_guard

APPLICATIONS_COLLECTION = "applications"


def build_application(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return the document stored for a submitted application."""
    return {
        "fullName": data["fullName"],
        "email": data["email"],
        "phone": data["phone"],
        "internship": data["internship"],
        "experience": data.get("experience") or "",
        "motivation": data["motivation"],
        "submittedAt": datetime.now(timezone.utc),
        "status": "pending",
    }


class MongoApplicationStore:
    mode = "database"

    def save_application(self, data: Dict[str, Any]) -> str:
        document = build_application(data)
        with upstream_guard("save an application"):
            result = database.get_database()[APPLICATIONS_COLLECTION].insert_one(document)
        return str(result.inserted_id)


class InMemoryApplicationStore:
    """Keeps applications for the lifetime of the process only."""

    mode = "mock"

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.applications: List[Dict[str, Any]] = []

    def save_application(self, data: Dict[str, Any]) -> str:
        document = build_application(data)
        document["_id"] = uuid.uuid4().hex
        with self._lock:
            self.applications.append(document)
        return document["_id"]


def init_app(app: Flask) -> None:
    if app.config.get("MONGODB_URI"):
        app.extensions["application_store"] = MongoApplicationStore()
    else:
        app.extensions["application_store"] = InMemoryApplicationStore()


def get_application_store():
    return current_app.extensions["application_store"]
