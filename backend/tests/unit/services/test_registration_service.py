# tests/unit/services/test_registration_service.py
from __future__ import annotations

import dataclasses

import pytest

from storefront.services._shared.base import RequestContext
from storefront.services._shared.errors import AssessmentUnavailableError
from storefront.services._shared.ports import (
    InMemoryBasketMarker,
    InMemoryBasketService,
    InMemoryCredentialStore,
    StubRiskAssessmentClient,
)
from storefront.services.registration.dto import (
    Approved,
    AssessmentUnavailable,
    CredentialCreationFailed,
    RegistrationRequest,
    Rejected,
    ValidationFailed,
)
from storefront.services.registration.service import SignupRegistrationService
from storefront.services.session.service import SessionBootstrap


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def form() -> RegistrationRequest:
    return RegistrationRequest(
        email="Grace@Example.com",
        password="Sup3rSecret!",
        first_name="Grace",
        last_name="Hopper",
        address1="1 Navy Yard",
        city="Arlington",
        zip_code="22202",
        country_region="US",
        fingerprint="fp",
        client_timezone_offset=300,
        client_local_date="2026-10-18",
    )


@pytest.fixture()
def context() -> RequestContext:
    return RequestContext(ip_address="198.51.100.4", correlation_id="sess-1")


@pytest.fixture()
def credentials() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture()
def baskets() -> InMemoryBasketService:
    svc = InMemoryBasketService()
    svc.add_item("b1", "sku-mug", 2)
    return svc


@pytest.fixture()
def marker() -> InMemoryBasketMarker:
    return InMemoryBasketMarker("b1")


def _service(risk, credentials, baskets, threshold=20.0) -> SignupRegistrationService:
    return SignupRegistrationService(
        risk, credentials, SessionBootstrap(baskets), threshold=threshold
    )


# -------------------------------- Scenarios -------------------------------- #
def test_low_score_approves_creates_account_and_merges_basket(form, context, credentials, baskets, marker):
    """Scenario A: score 5 -> account, session, basket b1 merged, marker cleared."""
    risk = StubRiskAssessmentClient([5])
    service = _service(risk, credentials, baskets)

    outcome = service.register(form, context, marker)

    assert isinstance(outcome, Approved)
    assert outcome.account.username == "grace@example.com"
    assert outcome.session.identity == "grace@example.com"
    assert credentials.create_calls == 1
    assert len(credentials.sessions) == 1
    assert baskets.baskets["grace@example.com"]["sku-mug"] == 2
    assert "b1" not in baskets.baskets
    assert marker.read() is None
    assert risk.calls == 1


def test_high_score_rejects_without_side_effects(form, context, credentials, baskets, marker):
    """Scenario B: score 45 -> Rejected, nothing created, marker untouched."""
    service = _service(StubRiskAssessmentClient([45]), credentials, baskets)

    outcome = service.register(form, context, marker)

    assert outcome == Rejected()
    assert "45" not in outcome.reason
    assert credentials.create_calls == 0
    assert credentials.sessions == []
    assert baskets.merges == []
    assert marker.read() == "b1"


def test_transport_error_is_unavailable_and_next_attempt_is_independent(
    form, context, credentials, baskets, marker
):
    """Scenario C: transport error -> AssessmentUnavailable; retry is a new event."""
    risk = StubRiskAssessmentClient([AssessmentUnavailableError("timeout"), 5])
    service = _service(risk, credentials, baskets)

    first = service.register(form, context, marker)

    assert isinstance(first, AssessmentUnavailable)
    assert credentials.create_calls == 0
    assert marker.read() == "b1"
    assert risk.calls == 1

    second = service.register(form, context, marker)

    assert isinstance(second, Approved)
    assert risk.calls == 2
    assert risk.events[0].signup_id != risk.events[1].signup_id


def test_unexpected_client_error_is_assessment_unavailable(form, context, credentials, baskets, marker):
    risk = StubRiskAssessmentClient([ConnectionError("reset"), 5])
    service = _service(risk, credentials, baskets)

    outcome = service.register(form, context, marker)

    assert isinstance(outcome, AssessmentUnavailable)
    assert credentials.create_calls == 0
    assert marker.read() == "b1"
    assert isinstance(service.register(form, context, marker), Approved)


def test_basket_outage_does_not_undo_approval(form, context, credentials, baskets, marker):
    baskets.fail = ConnectionError("basket down")
    service = _service(StubRiskAssessmentClient([5]), credentials, baskets)

    outcome = service.register(form, context, marker)

    assert isinstance(outcome, Approved)
    assert len(credentials.sessions) == 1
    assert marker.read() == "b1"


def test_client_local_date_reaches_event_verbatim(form, context, credentials, baskets, marker):
    raw = " Sat Oct 18 2026 10:00:00 GMT-0500 (Central Daylight Time) extra "
    risk = StubRiskAssessmentClient([5])

    _service(risk, credentials, baskets).register(
        dataclasses.replace(form, client_local_date=raw), context, marker
    )

    assert risk.events[0].customer_local_date == raw


def test_duplicate_email_is_credential_failure_without_session(form, context, credentials, baskets, marker):
    """Scenario D: approved score but existing email -> no session, no merge."""
    service = _service(StubRiskAssessmentClient([5]), credentials, baskets)
    assert isinstance(service.register(form, context, InMemoryBasketMarker()), Approved)
    sessions_before = len(credentials.sessions)

    outcome = service.register(form, context, marker)

    assert isinstance(outcome, CredentialCreationFailed)
    assert outcome.errors == ("Email 'grace@example.com' is already taken.",)
    assert len(credentials.sessions) == sessions_before
    assert baskets.merges == []
    assert marker.read() == "b1"


# ------------------------------ Properties -------------------------------- #
REQUIRED_FIELDS = [
    "email",
    "password",
    "first_name",
    "last_name",
    "address1",
    "city",
    "zip_code",
    "country_region",
]


@pytest.mark.parametrize("blank", ["", None])
@pytest.mark.parametrize("missing", REQUIRED_FIELDS)
def test_missing_required_field_fails_validation_without_calls(
    form, context, credentials, baskets, marker, missing, blank
):
    risk = StubRiskAssessmentClient([5])
    service = _service(risk, credentials, baskets)
    broken = dataclasses.replace(form, **{missing: blank})

    outcome = service.register(broken, context, marker)

    assert isinstance(outcome, ValidationFailed)
    assert missing in outcome.fields
    assert risk.calls == 0
    assert credentials.create_calls == 0
    assert baskets.merges == []


def test_malformed_email_fails_validation(form, context, credentials, baskets, marker):
    risk = StubRiskAssessmentClient([5])
    outcome = _service(risk, credentials, baskets).register(
        dataclasses.replace(form, email="not-an-email"), context, marker
    )

    assert isinstance(outcome, ValidationFailed)
    assert list(outcome.fields) == ["email"]
    assert risk.calls == 0


@pytest.mark.parametrize(
    ("score", "approved"),
    [(0, True), (19.99, True), (20, True), (20.01, False), (100, False)],
)
def test_threshold_is_strictly_greater_than(form, context, credentials, baskets, marker, score, approved):
    service = _service(StubRiskAssessmentClient([score]), credentials, baskets, threshold=20)

    outcome = service.register(form, context, marker)

    assert isinstance(outcome, Approved) is approved
    assert credentials.create_calls == (1 if approved else 0)


def test_threshold_is_configurable(form, context, credentials, baskets, marker):
    service = _service(StubRiskAssessmentClient([45]), credentials, baskets, threshold=50)

    assert isinstance(service.register(form, context, marker), Approved)


@pytest.mark.parametrize("score", [None, float("nan"), float("inf"), True])
def test_unusable_score_is_treated_as_unavailable(form, context, credentials, baskets, marker, score):
    service = _service(StubRiskAssessmentClient([score]), credentials, baskets)

    outcome = service.register(form, context, marker)

    assert isinstance(outcome, AssessmentUnavailable)
    assert credentials.create_calls == 0


def test_event_is_built_from_normalized_request(form, context, credentials, baskets, marker):
    risk = StubRiskAssessmentClient([1])
    _service(risk, credentials, baskets).register(form, context, marker)

    (event,) = risk.events
    assert event.user.email == "grace@example.com"
    assert event.device_context.ip_address == "198.51.100.4"
    assert event.device_context.device_context_id == "sess-1"
    assert event.customer_local_date == "2026-10-18"


def test_merge_failure_does_not_undo_approval(form, context, credentials, marker):
    baskets = InMemoryBasketService(fail=True)
    service = _service(StubRiskAssessmentClient([5]), credentials, baskets)

    outcome = service.register(form, context, marker)

    assert isinstance(outcome, Approved)
    assert marker.read() == "b1"
    assert baskets.merges == [("b1", "grace@example.com")]
