"""Unit tests for the storefront CORS policy."""

from __future__ import annotations

import pytest
from flask import Flask

from storefront.core import cors


def _app(origins: str) -> Flask:
    app = Flask(__name__)
    app.config["CORS_ORIGINS"] = origins

    @app.get("/api/v1/ping")
    def ping():
        return {"ok": True}

    cors.init_app(app)
    return app


def test_configured_origin_gets_credentialed_cors():
    resp = _app("https://shop.example").test_client().get(
        "/api/v1/ping", headers={"Origin": "https://shop.example"}
    )

    assert resp.headers["Access-Control-Allow-Origin"] == "https://shop.example"
    assert resp.headers["Access-Control-Allow-Credentials"] == "true"
    assert "X-Request-ID" in resp.headers["Access-Control-Expose-Headers"]


def test_unlisted_origin_is_not_allowed():
    resp = _app("https://shop.example").test_client().get(
        "/api/v1/ping", headers={"Origin": "https://evil.example"}
    )

    assert "Access-Control-Allow-Origin" not in resp.headers


@pytest.mark.parametrize("origins", ["", "*", " * , "])
def test_wildcard_or_blank_origins_disable_cors(origins):
    resp = _app(origins).test_client().get("/api/v1/ping", headers={"Origin": "https://shop.example"})

    assert "Access-Control-Allow-Origin" not in resp.headers
