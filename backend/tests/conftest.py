"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases. External
collaborators (risk service, basket store) are replaced by in-memory doubles
registered on the application.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Any

import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from storefront.api.deps import BASKET_SERVICE_KEY, RISK_CLIENT_KEY
from storefront.core.config import TestingConfig
from storefront.core.extensions import db as _db  # Flask-SQLAlchemy instance
from storefront.factory import create_app  # application factory under test
from storefront.services._shared.ports import InMemoryBasketService, StubRiskAssessmentClient


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - Never talks to Redis or the fraud API; doubles are injected per test.
    - Proxy headers are ignored so ``remote_addr`` is the test client address.
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-0123456789"
    SECRET_KEY = "test-secret"
    USE_PROXYFIX = False
    RISK_REJECTION_THRESHOLD = 20.0
    BASKET_COOKIE_NAME = "basket_id"
    SESSION_ID_COOKIE_NAME = "device_session"


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestConfig` applied and logging
        noise reduced.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    os.environ.pop("REDIS_URL", None)
    app = create_app(TestConfig)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated DBAPI connection open for the whole session."""
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """Provide a SQLAlchemy session wrapped in a nested transaction.

    Notes
    -----
    The fixture mirrors the SQLAlchemy 2.0 pattern for transactional tests: it
    begins a top-level transaction, starts a SAVEPOINT per test, and reinstalls
    the SAVEPOINT whenever SQLAlchemy ends one.
    """
    # 1) Top-level transaction
    top_trans = connection.begin()

    # 2) Scoped session bound to the connection
    SessionFactory = sessionmaker(bind=connection, future=True, autoflush=False)
    scoped = scoped_session(SessionFactory)

    # 3) SAVEPOINT per test
    nested = connection.begin_nested()

    # 4) Re-create SAVEPOINT when the previous nested transaction ends
    @event.listens_for(scoped(), "after_transaction_end")
    def _restart_savepoint(sess, trans):  # pragma: no cover
        if trans.nested and not trans._parent.nested:
            nonlocal nested
            nested = connection.begin_nested()

    # 5) Monkey-patch db.session so app code uses this scoped session
    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        top_trans.rollback()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield


# -- External collaborators ----------------------------------------------------
@pytest.fixture()
def risk_client() -> StubRiskAssessmentClient:
    """Risk client approving every signup with a low score unless re-scripted."""
    return StubRiskAssessmentClient([5.0])


@pytest.fixture()
def basket_service() -> InMemoryBasketService:
    return InMemoryBasketService()


@pytest.fixture()
def client(app, session, risk_client, basket_service):
    """Return a Flask test client wired to the in-memory collaborators."""
    app.extensions[RISK_CLIENT_KEY] = risk_client
    app.extensions[BASKET_SERVICE_KEY] = basket_service
    try:
        # Fresh app context per test so ``g`` does not leak between tests
        # through the session-scoped context held by the ``db`` fixture.
        with app.app_context():
            yield app.test_client()
    finally:
        app.extensions.pop(RISK_CLIENT_KEY, None)
        app.extensions.pop(BASKET_SERVICE_KEY, None)


@pytest.fixture()
def registration_payload(faker) -> Callable[..., dict[str, Any]]:
    """Factory returning a complete registration JSON body."""

    def _factory(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "email": faker.unique.email(),
            "password": "Sup3rSecret!",
            "first_name": faker.first_name(),
            "last_name": faker.last_name(),
            "address1": faker.street_address(),
            "address2": None,
            "city": faker.city(),
            "state": "WA",
            "zip_code": faker.postcode(),
            "country_region": "US",
            "phone": "555-0100",
            "fingerprint": "fp-token",
            "client_timezone_offset": 300,
            "client_local_date": "2026-10-18T09:15:00",
        }
        payload.update(overrides)
        return payload

    return _factory
