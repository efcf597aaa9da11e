"""Account endpoints: fraud-gated registration, sign-in and sign-out."""

from __future__ import annotations

from dataclasses import fields
from typing import Any
from urllib.parse import urlparse

from flask import Blueprint, Response, request
from flask_jwt_extended import set_access_cookies, unset_jwt_cookies

from storefront.api.cookies import CookieBasketMarker
from storefront.api.deps import (
    json_response,
    registration_service,
    request_context,
    signin_service,
    timing,
)
from storefront.core.errors import (
    Conflict,
    Forbidden,
    ServiceUnavailable,
    Unauthorized,
    UnprocessableEntity,
)
from storefront.schemas import AccountSchema, SignInSchema
from storefront.services.identity.dto import AccountOut, SessionOut
from storefront.services.registration.dto import (
    Approved,
    AssessmentUnavailable,
    CredentialCreationFailed,
    RegistrationRequest,
    Rejected,
    ValidationFailed,
)
from storefront.services.signin.dto import InvalidCredentials, SignInRequest

bp = Blueprint("account", __name__, url_prefix="/account")

account_schema = AccountSchema()
signin_schema = SignInSchema()

CATALOG_PATH = "/"
BASKET_PATH = "/basket"

_REGISTRATION_FIELDS = tuple(f.name for f in fields(RegistrationRequest))


def is_local_url(url: str | None) -> bool:
    """Return ``True`` for same-origin relative paths only."""

    if not url or not url.startswith("/") or url.startswith(("//", "/\\")):
        return False
    parsed = urlparse(url)
    return not parsed.scheme and not parsed.netloc


def resolve_return_url(raw: str | None, *, after_sign_in: bool = False) -> str:
    """Pick the post-authentication redirect.

    Foreign or missing URLs fall back to the catalog. After sign-in a
    checkout URL sends the user to the basket first.
    """

    if raw is None or not is_local_url(raw):
        return CATALOG_PATH
    if after_sign_in and "checkout" in raw.lower():
        return BASKET_PATH
    return raw


def _json_body() -> dict[str, Any]:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _authenticated_response(
    account: AccountOut,
    session: SessionOut,
    marker: CookieBasketMarker,
    *,
    redirect: str,
    status: int,
) -> Response:
    body = {
        "data": account_schema.dump(account),
        "access_token": session.access_token,
        "redirect": redirect,
    }
    response = json_response(body, status=status)
    set_access_cookies(response, session.access_token, max_age=session.max_age)
    return marker.apply(response)


@bp.post("/register")
@timing
def register():
    """Register a new account after the signup risk assessment approves it."""

    payload = _json_body()
    form = RegistrationRequest(**{name: payload.get(name) for name in _REGISTRATION_FIELDS})
    marker = CookieBasketMarker()

    outcome = registration_service().register(form, request_context(), marker)

    if isinstance(outcome, Approved):
        return _authenticated_response(
            outcome.account,
            outcome.session,
            marker,
            redirect=resolve_return_url(payload.get("return_url")),
            status=201,
        )
    if isinstance(outcome, ValidationFailed):
        raise UnprocessableEntity(details={"errors": outcome.fields})
    if isinstance(outcome, Rejected):
        raise Forbidden(outcome.reason, code="signup_rejected")
    if isinstance(outcome, AssessmentUnavailable):
        raise ServiceUnavailable(outcome.detail)
    if isinstance(outcome, CredentialCreationFailed):
        raise Conflict("Account could not be created", details={"errors": list(outcome.errors)})
    raise TypeError(f"Unhandled registration outcome: {outcome!r}")


@bp.post("/sign-in")
@timing
def sign_in():
    """Authenticate a returning user and reconcile their guest basket."""

    data = signin_schema.load(_json_body())
    marker = CookieBasketMarker()

    form = SignInRequest(data["email"], data["password"], remember_me=data["remember_me"])
    outcome = signin_service().sign_in(form, marker)

    if isinstance(outcome, InvalidCredentials):
        raise Unauthorized(outcome.message)
    return _authenticated_response(
        outcome.account,
        outcome.session,
        marker,
        redirect=resolve_return_url(data.get("return_url"), after_sign_in=True),
        status=200,
    )


@bp.post("/sign-out")
@timing
def sign_out():
    """End the session by expiring the session cookies."""

    response = json_response({"redirect": CATALOG_PATH})
    unset_jwt_cookies(response)
    return response
