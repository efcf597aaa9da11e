"""
SignupRegistrationService
=========================

Process-level service for fraud-gated self-registration:

- Validates the submitted form before any external call.
- Submits exactly one signup assessment event per attempt.
- Creates the account and session only when the risk score is at or below
  the configured threshold, then reconciles the guest basket.

Every expected failure resolves to an outcome value; nothing is retried.
"""

from __future__ import annotations

import logging
from dataclasses import asdict

from marshmallow import ValidationError

from storefront.schemas.account import RegisterSchema
from storefront.services._shared.base import RequestContext
from storefront.services._shared.errors import CredentialValidationError
from storefront.services._shared.ports import (
    AnonymousBasketMarker,
    CredentialStore,
    RiskAssessmentClient,
)
from storefront.services.registration.dto import (
    Approved,
    AssessmentUnavailable,
    CredentialCreationFailed,
    RegistrationOutcome,
    RegistrationRequest,
    Rejected,
    ValidationFailed,
)
from storefront.services.registration.events import AssessmentSettings, build_signup_event
from storefront.services.session.service import SessionBootstrap

logger = logging.getLogger(__name__)

DEFAULT_REJECTION_THRESHOLD = 20.0


class SignupRegistrationService:
    """
    Orchestrates validate, assess, decide, create, sign in, reconcile.

    The service holds collaborators and settings only; no state survives
    between calls.

    :param risk_client: Fraud-risk scoring client.
    :param credentials: Account/session store.
    :param bootstrap: Post-authentication basket reconciliation.
    :param threshold: Scores strictly above this value are rejected.
    :param settings: Static merchant context for assessment events.
    """

    def __init__(
        self,
        risk_client: RiskAssessmentClient,
        credentials: CredentialStore,
        bootstrap: SessionBootstrap,
        *,
        threshold: float = DEFAULT_REJECTION_THRESHOLD,
        settings: AssessmentSettings | None = None,
    ) -> None:
        self.risk_client = risk_client
        self.credentials = credentials
        self.bootstrap = bootstrap
        self.threshold = float(threshold)
        self.settings = settings or AssessmentSettings()
        self._schema = RegisterSchema()

    def register(
        self,
        request: RegistrationRequest,
        context: RequestContext,
        marker: AnonymousBasketMarker,
    ) -> RegistrationOutcome:
        """
        Run one registration attempt.

        :param request: Submitted registration form.
        :param context: Caller origin, correlation id and server time.
        :param marker: Client-held anonymous basket marker.
        :returns: Exactly one outcome variant.
        """
        try:
            request = self._validate(request)
        except ValidationError as err:
            logger.info("Signup form invalid", extra={"outcome": "validation_failed"})
            return ValidationFailed(fields=_field_messages(err))

        event = build_signup_event(request, context, self.settings)
        log_extra = {"assessment_id": event.signup_id}

        try:
            decision = self.risk_client.submit_signup_event(event)
        except Exception:
            # Any client failure aborts the attempt; the caller may resubmit.
            logger.warning(
                "Signup assessment unavailable",
                exc_info=True,
                extra={**log_extra, "outcome": "assessment_unavailable"},
            )
            return AssessmentUnavailable()

        if not decision.has_usable_score:
            logger.warning(
                "Signup assessment returned no usable score",
                extra={**log_extra, "outcome": "assessment_unavailable"},
            )
            return AssessmentUnavailable()

        if float(decision.risk_score) > self.threshold:  # type: ignore[arg-type]
            logger.info("Signup rejected", extra={**log_extra, "outcome": "rejected"})
            return Rejected()

        try:
            account = self.credentials.create_account(request.to_profile(), request.password)
        except CredentialValidationError as exc:
            logger.info(
                "Signup approved but account refused",
                extra={**log_extra, "outcome": "credential_creation_failed"},
            )
            return CredentialCreationFailed(errors=tuple(exc.errors))

        session = self.credentials.establish_session(account)
        self.bootstrap.on_authenticated(account.username, marker)

        logger.info(
            "Signup approved",
            extra={**log_extra, "outcome": "approved", "identity": account.username},
        )
        return Approved(account=account, session=session)

    def _validate(self, request: RegistrationRequest) -> RegistrationRequest:
        submitted = {k: v for k, v in asdict(request).items() if v is not None}
        data = self._schema.load(submitted)
        return RegistrationRequest(**data)


def _field_messages(err: ValidationError) -> dict[str, list[str]]:
    messages = err.messages if isinstance(err.messages, dict) else {"_schema": err.messages}
    return {
        str(name): [str(m) for m in (msgs if isinstance(msgs, list) else [msgs])]
        for name, msgs in messages.items()
    }
