"""Extension singletons: account database, migrations, JWT sessions and the basket Redis."""

from __future__ import annotations

import redis  # type: ignore[import-untyped]
from flask import Flask
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

# Constraint names the migrations and ``violates()`` rely on
metadata = MetaData(
    naming_convention={
        "ix": "ix_%(table_name)s_%(column_0_name)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "pk": "pk_%(table_name)s",
    }
)

db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()
redis_client: redis.Redis | None = None


def init_app(app: Flask) -> None:
    """Bind the extensions to ``app`` and connect the basket store.

    Basket quantities are read back as ``str`` (``decode_responses``). Without
    ``REDIS_URL`` no client is created; tests inject an in-memory basket
    service instead.
    """
    db.init_app(app)

    # Model import registers the tables on ``metadata`` for Alembic
    from storefront import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)

    global redis_client
    redis_url = app.config.get("REDIS_URL")
    if not redis_url:
        redis_client = None
        return

    redis_client = redis.Redis.from_url(redis_url, decode_responses=True)
    try:
        redis_client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Basket store unreachable at {redis_url!r}") from exc


def get_redis() -> redis.Redis:
    """Return the basket store client."""
    if redis_client is None:
        raise RuntimeError("Basket store is not configured; set REDIS_URL.")
    return redis_client
