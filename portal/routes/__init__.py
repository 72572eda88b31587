"""Blueprint registration helper."""

from __future__ import annotations

from flask import Flask, jsonify

from .admin import bp as admin_bp
from .applications import bp as applications_bp
from .certificates import bp as certificates_bp
from .contact import bp as contact_bp


def register_routes(app: Flask) -> None:
    """Register all application blueprints on the provided Flask app."""
    app.register_blueprint(certificates_bp)
    app.register_blueprint(applications_bp)
    app.register_blueprint(contact_bp)
    app.register_blueprint(admin_bp)

    @app.get("/")
    def index():
        return jsonify(message="Hello from the certificate portal API"), 200
