"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'


# Load .env in development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_float(name: str, default: float) -> float:
    """Parse a float setting, falling back to ``default`` when unset or blank."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return float(val)


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing.
    JWT_SECRET_KEY: str
        Key used by ``flask-jwt-extended`` for signing session tokens.
    JWT_TOKEN_LOCATION: list[str]
        Where session tokens are accepted from (cookies first, then headers).
    REMEMBER_ME_SECONDS: int
        Lifetime of a "remember me" session. Other sessions end with the browser.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string for the account store.
    REDIS_URL: str | None
        Redis instance backing the basket store. ``None`` disables it.
    RISK_REJECTION_THRESHOLD: float
        Signup risk scores strictly above this value are rejected.
    FRAUD_PROTECTION_BASE_URL: str
        Base URL of the fraud-risk assessment API.
    FRAUD_PROTECTION_SIGNUP_PATH: str
        Path (relative to the base URL) receiving signup events.
    FRAUD_PROTECTION_API_TOKEN: str | None
        Bearer token sent to the assessment API.
    FRAUD_PROTECTION_TIMEOUT: float
        Per-call timeout in seconds.
    BASKET_COOKIE_NAME: str
        Cookie holding the anonymous basket marker.
    SESSION_ID_COOKIE_NAME: str
        Cookie holding the device session id used as assessment correlation id.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT")
    JWT_TOKEN_LOCATION = ["cookies", "headers"]
    JWT_COOKIE_SECURE = env_bool("JWT_COOKIE_SECURE", False)
    REMEMBER_ME_SECONDS = int(os.getenv("REMEMBER_ME_SECONDS", str(60 * 60 * 24 * 14)))

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Baskets
    REDIS_URL = os.getenv("REDIS_URL")
    BASKET_COOKIE_NAME = os.getenv("BASKET_COOKIE_NAME", "basket_id")
    BASKET_TTL_SECONDS = int(os.getenv("BASKET_TTL_SECONDS", str(60 * 60 * 24 * 30)))
    SESSION_ID_COOKIE_NAME = os.getenv("SESSION_ID_COOKIE_NAME", "device_session")

    # Fraud protection
    RISK_REJECTION_THRESHOLD = env_float("RISK_REJECTION_THRESHOLD", 20.0)
    FRAUD_PROTECTION_BASE_URL = os.getenv(
        "FRAUD_PROTECTION_BASE_URL", "http://localhost:8081/v1.0/merchantservices"
    )
    FRAUD_PROTECTION_SIGNUP_PATH = os.getenv("FRAUD_PROTECTION_SIGNUP_PATH", "/events/SignUp")
    FRAUD_PROTECTION_API_TOKEN = os.getenv("FRAUD_PROTECTION_API_TOKEN")
    FRAUD_PROTECTION_TIMEOUT = env_float("FRAUD_PROTECTION_TIMEOUT", 5.0)
    FRAUD_PROTECTION_STORE_NAME = os.getenv(
        "FRAUD_PROTECTION_STORE_NAME", "Fraud Protection Sample Site"
    )
    FRAUD_PROTECTION_MARKET = os.getenv("FRAUD_PROTECTION_MARKET", "US")
    FRAUD_PROTECTION_LANGUAGE = os.getenv("FRAUD_PROTECTION_LANGUAGE", "EN-US")
    FRAUD_PROTECTION_INCENTIVE_OFFER = os.getenv(
        "FRAUD_PROTECTION_INCENTIVE_OFFER", "Integrate with Fraud Protection"
    )

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and honors ``SQLALCHEMY_ECHO`` for verbose
    SQL logging when requested.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Never connects to Redis or the fraud API; tests inject doubles.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    REDIS_URL = None
    JWT_COOKIE_CSRF_PROTECT = False
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled and requires secure cookies.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False
    JWT_COOKIE_SECURE = True


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
