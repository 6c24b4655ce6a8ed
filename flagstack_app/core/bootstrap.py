"""Bootstrap helpers for configuring the Flask application."""

from __future__ import annotations

import logging

from flask import Flask, request

from ..extensions import db, login_manager
from .error_handlers import AuthenticationError
from .logging_config import setup_logging
from .module_registry import register_default_modules


def configure_logging(app: Flask) -> None:
    """Configure application logging if no handlers are present."""

    setup_logging(
        app,
        log_level=app.config.get("LOG_LEVEL", "INFO"),
        log_dir=app.config.get("LOG_DIR"),
        json_format=app.config.get("LOG_JSON", False),
    )

    if app.logger.handlers:
        return

    app.logger.setLevel(logging.DEBUG if app.debug else logging.INFO)
    handler = logging.StreamHandler()
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    app.logger.addHandler(handler)
    app.logger.propagate = False
    app.logger.info("Flask app logger configured successfully.")


def register_extensions(app: Flask) -> None:
    """Initialize shared extensions with the Flask app instance."""

    db.init_app(app)
    login_manager.init_app(app)


def register_identity_loaders(app: Flask) -> None:
    """Wire Flask-Login to the external identity provider.

    The provider authenticates the caller upstream and forwards an opaque
    subject in ``AUTH_SUBJECT_HEADER``; this service only maps that subject
    to a local user row.
    """

    @login_manager.user_loader
    def load_user(user_id: str):
        from ..models import User

        return db.session.get(User, int(user_id))

    @login_manager.request_loader
    def load_user_from_request(req):
        from ..models import User

        subject = req.headers.get(app.config["AUTH_SUBJECT_HEADER"])
        if not subject:
            return None
        return User.query.filter_by(external_id=subject).first()

    @login_manager.unauthorized_handler
    def unauthorized():
        raise AuthenticationError(f"No authenticated identity for {request.path}")


def register_blueprints(app: Flask) -> None:
    """Register all default blueprints with the app."""

    register_default_modules(app)


def initialize_database(app: Flask) -> None:
    """Create database tables."""

    from .. import models  # noqa: F401  (register mappers before create_all)

    db.create_all()
    app.logger.info("Database schema ready at %s", app.config["SQLALCHEMY_DATABASE_URI"])
