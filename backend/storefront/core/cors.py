"""CORS policy for the storefront API."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS


def init_app(app: Flask) -> None:
    """Allow credentialed cross-origin calls from the configured storefront origins.

    Session and basket cookies only travel on credentialed requests, which
    browsers refuse for a wildcard origin, so ``"*"`` and a blank
    ``CORS_ORIGINS`` leave CORS disabled.
    """
    origins = [o.strip() for o in app.config.get("CORS_ORIGINS", "").split(",") if o.strip()]
    if not origins or "*" in origins:
        app.logger.info("CORS disabled: no explicit storefront origins configured")
        return

    CORS(
        app,
        resources={r"/api/*": {"origins": origins}},
        supports_credentials=True,
        expose_headers=["X-Request-ID"],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
