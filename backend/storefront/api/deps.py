"""Shared API helpers: collaborator wiring, request context and responses."""

from __future__ import annotations

import functools
import time
from datetime import timedelta
from collections.abc import Callable
from typing import Any, TypeVar, cast

from flask import Response, current_app, jsonify, request

from storefront.core.extensions import get_redis
from storefront.core.logger import ensure_request_id
from storefront.infra.fraud.http_risk_client import HttpRiskAssessmentClient
from storefront.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from storefront.infra.redis.redis_basket_store import RedisBasketStore
from storefront.services._shared.base import RequestContext
from storefront.services._shared.ports import (
    BasketReconciliationService,
    RiskAssessmentClient,
    TokenProvider,
)
from storefront.services.identity.service import IdentityService
from storefront.services.registration.events import AssessmentSettings
from storefront.services.registration.service import SignupRegistrationService
from storefront.services.session.service import SessionBootstrap
from storefront.services.signin.service import SignInService

F = TypeVar("F", bound=Callable[..., Any])

# Keys under ``app.extensions``; tests register doubles under the same names.
RISK_CLIENT_KEY = "risk_client"
BASKET_SERVICE_KEY = "basket_service"
TOKEN_PROVIDER_KEY = "token_provider"


def get_risk_client() -> RiskAssessmentClient:
    """Return the app-wide risk client, building the HTTP adapter on first use."""

    client = current_app.extensions.get(RISK_CLIENT_KEY)
    if client is None:
        client = HttpRiskAssessmentClient.from_config(current_app.config)
        current_app.extensions[RISK_CLIENT_KEY] = client
    return cast(RiskAssessmentClient, client)


def get_basket_service() -> BasketReconciliationService:
    """Return the app-wide basket service, backed by Redis unless overridden."""

    service = current_app.extensions.get(BASKET_SERVICE_KEY)
    if service is None:
        service = RedisBasketStore(
            get_redis(),
            ttl_seconds=int(current_app.config["BASKET_TTL_SECONDS"]),
        )
        current_app.extensions[BASKET_SERVICE_KEY] = service
    return cast(BasketReconciliationService, service)


def get_token_provider() -> TokenProvider:
    provider = current_app.extensions.setdefault(TOKEN_PROVIDER_KEY, JWTTokenProvider())
    return cast(TokenProvider, provider)


def identity_service() -> IdentityService:
    remember_for = timedelta(seconds=int(current_app.config["REMEMBER_ME_SECONDS"]))
    return IdentityService(get_token_provider(), remember_for=remember_for)


def registration_service() -> SignupRegistrationService:
    """Assemble the registration orchestrator for the current request."""

    return SignupRegistrationService(
        get_risk_client(),
        identity_service(),
        SessionBootstrap(get_basket_service()),
        threshold=float(current_app.config["RISK_REJECTION_THRESHOLD"]),
        settings=AssessmentSettings.from_config(current_app.config),
    )


def signin_service() -> SignInService:
    return SignInService(
        identity_service(),
        SessionBootstrap(get_basket_service()),
    )


def request_context() -> RequestContext:
    """Capture caller origin, correlation id and server time for the current request.

    The device session cookie, when present, doubles as the correlation id so
    the risk service can tie the fingerprint to this attempt. Otherwise the
    request id is used.
    """

    cookie_name = current_app.config["SESSION_ID_COOKIE_NAME"]
    correlation_id = request.cookies.get(cookie_name) or ensure_request_id()
    return RequestContext(ip_address=request.remote_addr or "", correlation_id=correlation_id)


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
