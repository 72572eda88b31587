"""Flask application setup and blueprint wiring."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from portal import database
from portal.config import load_config
from portal.errors import register_error_handlers
from portal.routes import register_routes
from portal.services import application_service, certificate_service
from portal.utils.rate_limit import SlidingWindowRateLimiter, register_rate_limit_headers

REQUEST_LIMIT_BYTES = 64 * 1024  # JSON forms only


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """Configure and return the Flask application instance."""
    app = Flask(__name__)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1)
    CORS(
        app,
        resources={r"/*": {"origins": "*"}},
        allow_headers=["Content-Type", "Authorization"],
        send_wildcard=True,
    )

    app.config.from_mapping(load_config())
    if overrides:
        app.config.update(overrides)
    app.config["MAX_CONTENT_LENGTH"] = REQUEST_LIMIT_BYTES
    app.logger.setLevel(app.config["LOG_LEVEL"])

    if app.config.get("MONGODB_URI"):
        database.configure(
            app.config["MONGODB_URI"],
            app.config["MONGODB_DATABASE"],
            app.config["MONGODB_TIMEOUT_MS"],
        )

    certificate_service.init_app(app)
    application_service.init_app(app)
    app.extensions["rate_limiter"] = SlidingWindowRateLimiter(
        max_requests=app.config["RATE_LIMIT_MAX_REQUESTS"],
        window_seconds=app.config["RATE_LIMIT_WINDOW_SECONDS"],
    )

    register_error_handlers(app)
    register_rate_limit_headers(app)
    register_routes(app)

    # Initialize MongoDB indexes when a database is configured
    store = app.extensions["certificate_store"]
    if store.mode == "database":
        try:
            store.create_indexes()
            app.logger.info("MongoDB indexes created successfully")
        except Exception as e:
            app.logger.warning(f"Failed to create MongoDB indexes: {e}")

    return app
