# tests/unit/services/test_signup_events.py
from __future__ import annotations

from datetime import UTC, datetime

import pytest
from freezegun import freeze_time

from storefront.services._shared.base import RequestContext
from storefront.services.registration.dto import RegistrationRequest
from storefront.services.registration.events import (
    AssessmentSettings,
    build_signup_event,
    format_timezone_offset,
)

SERVER_TIME = datetime(2026, 10, 18, 12, 30, tzinfo=UTC)


@pytest.fixture()
def request_form() -> RegistrationRequest:
    return RegistrationRequest(
        email="ada@example.com",
        password="Sup3rSecret!",
        first_name="Ada",
        last_name="Lovelace",
        address1="1 Analytical Way",
        address2="Suite 2",
        city="London",
        state=None,
        zip_code="NW1",
        country_region="GB",
        phone="555-0100",
        fingerprint="fp-123",
        client_timezone_offset=-60,
        client_local_date="10/18/2026, 1:30:00 PM",
    )


@pytest.fixture()
def context() -> RequestContext:
    return RequestContext(ip_address="203.0.113.7", correlation_id="sess-42", server_time=SERVER_TIME)


@pytest.mark.parametrize(
    ("offset", "expected"),
    [
        (300, "-05:00:00"),
        (-330, "05:30:00"),
        (0, "00:00:00"),
        (None, "00:00:00"),
        (-765, "12:45:00"),
    ],
)
def test_format_timezone_offset_negates_browser_offset(offset, expected):
    assert format_timezone_offset(offset) == expected


def test_event_carries_request_and_context(request_form, context):
    payload = build_signup_event(request_form, context).to_payload()

    assert payload["assessmentType"] == "protect"
    assert payload["merchantLocalDate"] == SERVER_TIME.isoformat()
    # Client date is passed through verbatim, never parsed
    assert payload["customerLocalDate"] == "10/18/2026, 1:30:00 PM"

    user = payload["user"]
    assert user["userId"] == "ada@example.com"
    details = user["userDetails"]
    assert details["timeZone"] == "01:00:00"
    assert details["language"] == "EN-US"
    assert details["profileType"] == "Consumer"
    assert details["creationDate"] == SERVER_TIME.isoformat()
    address = details["signUpAddress"]["signupAddressDetails"]
    assert address["street1"] == "1 Analytical Way"
    assert address["street2"] == "Suite 2"
    assert address["state"] is None
    assert address["country"] == "GB"

    device = payload["deviceContext"]
    assert device["deviceContextId"] == "sess-42"
    assert device["ipAddress"] == "203.0.113.7"
    assert device["deviceContextDetails"] == {
        "deviceContextDC": "fp-123",
        "provider": "DFPFINGERPRINTING",
    }


def test_event_uses_static_merchant_context(request_form, context):
    settings = AssessmentSettings(store_name="Contoso", market="CA", language="FR-CA")

    payload = build_signup_event(request_form, context, settings).to_payload()

    assert payload["storeFrontContext"] == {"storeName": "Contoso", "type": "Web", "market": "CA"}
    assert payload["marketingContext"] == {
        "type": "Direct",
        "incentiveType": "None",
        "incentiveOffer": "Integrate with Fraud Protection",
    }
    assert payload["user"]["userDetails"]["language"] == "FR-CA"


def test_identical_requests_get_distinct_assessment_ids(request_form, context):
    first = build_signup_event(request_form, context)
    second = build_signup_event(request_form, context)

    assert first.signup_id != second.signup_id
    # Everything except the id is deterministic
    a, b = first.to_payload(), second.to_payload()
    a.pop("signUpId"), b.pop("signUpId")
    assert a == b


def test_settings_from_config_fall_back_to_defaults():
    settings = AssessmentSettings.from_config({"FRAUD_PROTECTION_MARKET": "DE"})

    assert settings.market == "DE"
    assert settings.store_name == "Fraud Protection Sample Site"
    assert settings.language == "EN-US"


@freeze_time("2026-01-02 03:04:05")
def test_request_context_stamps_server_time():
    ctx = RequestContext(ip_address="127.0.0.1", correlation_id="c")

    assert ctx.server_time == datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)
