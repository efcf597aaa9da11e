"""
Signup assessment event sent to the fraud-risk service.

The event is derived from a validated :class:`RegistrationRequest` and the
:class:`RequestContext` only. It is write-once and never persisted; each
build stamps a fresh ``signup_id``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import uuid4

from storefront.services._shared.base import RequestContext
from storefront.services.registration.dto import RegistrationRequest

ASSESSMENT_TYPE = "protect"
PROFILE_TYPE = "Consumer"
DEVICE_PROVIDER = "DFPFINGERPRINTING"
MARKETING_TYPE = "Direct"
MARKETING_INCENTIVE_TYPE = "None"
STOREFRONT_TYPE = "Web"

DEFAULT_STORE_NAME = "Fraud Protection Sample Site"
DEFAULT_MARKET = "US"
DEFAULT_LANGUAGE = "EN-US"
DEFAULT_INCENTIVE_OFFER = "Integrate with Fraud Protection"


@dataclass(frozen=True, slots=True)
class AssessmentSettings:
    """
    Static merchant context attached to every signup event.

    :param store_name: Storefront name reported to the risk service.
    :param market: Market code.
    :param language: Default customer language.
    :param incentive_offer: Marketing incentive label.
    """

    store_name: str = DEFAULT_STORE_NAME
    market: str = DEFAULT_MARKET
    language: str = DEFAULT_LANGUAGE
    incentive_offer: str = DEFAULT_INCENTIVE_OFFER

    @classmethod
    def from_config(cls, config: Any) -> AssessmentSettings:
        """Build settings from a Flask-style config mapping."""
        return cls(
            store_name=config.get("FRAUD_PROTECTION_STORE_NAME", DEFAULT_STORE_NAME),
            market=config.get("FRAUD_PROTECTION_MARKET", DEFAULT_MARKET),
            language=config.get("FRAUD_PROTECTION_LANGUAGE", DEFAULT_LANGUAGE),
            incentive_offer=config.get("FRAUD_PROTECTION_INCENTIVE_OFFER", DEFAULT_INCENTIVE_OFFER),
        )


def format_timezone_offset(offset_minutes: int | None) -> str:
    """
    Render a browser timezone offset as a signed ``[-]HH:MM:SS`` span.

    Browsers report minutes *behind* UTC (``300`` for UTC-5), so the value is
    negated: ``300`` -> ``"-05:00:00"``, ``-330`` -> ``"05:30:00"``.
    """
    total = -int(offset_minutes or 0)
    sign = "-" if total < 0 else ""
    hours, minutes = divmod(abs(total), 60)
    return f"{sign}{hours:02d}:{minutes:02d}:00"


def _iso(value: datetime) -> str:
    return value.isoformat()


# --------------------------------------------------------------------------- #
# Nested records
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class SignupAddress:
    first_name: str
    last_name: str
    phone_number: str | None
    street1: str
    street2: str | None
    city: str
    state: str | None
    zip_code: str
    country: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "phoneNumber": self.phone_number,
            "signupAddressDetails": {
                "street1": self.street1,
                "street2": self.street2,
                "city": self.city,
                "state": self.state,
                "zipCode": self.zip_code,
                "country": self.country,
            },
        }


@dataclass(frozen=True, slots=True)
class SignupUser:
    """User identity and profile as seen by the risk service."""

    user_id: str
    creation_date: datetime
    update_date: datetime
    first_name: str
    last_name: str
    country: str
    zip_code: str
    time_zone: str
    language: str
    phone_number: str | None
    email: str
    address: SignupAddress
    profile_type: str = PROFILE_TYPE

    def to_payload(self) -> dict[str, Any]:
        return {
            "userId": self.user_id,
            "userDetails": {
                "creationDate": _iso(self.creation_date),
                "updateDate": _iso(self.update_date),
                "firstName": self.first_name,
                "lastName": self.last_name,
                "country": self.country,
                "zipCode": self.zip_code,
                "timeZone": self.time_zone,
                "language": self.language,
                "phoneNumber": self.phone_number,
                "email": self.email,
                "profileType": self.profile_type,
                "signUpAddress": self.address.to_payload(),
            },
        }


@dataclass(frozen=True, slots=True)
class DeviceContext:
    device_context_id: str
    ip_address: str
    fingerprint: str | None
    provider: str = DEVICE_PROVIDER

    def to_payload(self) -> dict[str, Any]:
        return {
            "deviceContextId": self.device_context_id,
            "ipAddress": self.ip_address,
            "deviceContextDetails": {
                "deviceContextDC": self.fingerprint,
                "provider": self.provider,
            },
        }


@dataclass(frozen=True, slots=True)
class MarketingContext:
    incentive_offer: str
    type: str = MARKETING_TYPE
    incentive_type: str = MARKETING_INCENTIVE_TYPE

    def to_payload(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "incentiveType": self.incentive_type,
            "incentiveOffer": self.incentive_offer,
        }


@dataclass(frozen=True, slots=True)
class StorefrontContext:
    store_name: str
    market: str
    type: str = STOREFRONT_TYPE

    def to_payload(self) -> dict[str, Any]:
        return {"storeName": self.store_name, "type": self.type, "market": self.market}


# --------------------------------------------------------------------------- #
# Event
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class SignupAssessmentEvent:
    """
    Structured record describing one signup attempt.

    :param user: Identity/profile block.
    :param device_context: Caller device and network origin.
    :param marketing_context: Static marketing block.
    :param storefront_context: Static storefront block.
    :param merchant_local_date: Server time of the attempt.
    :param customer_local_date: Client-reported date, passed through untouched.
    :param signup_id: Unique assessment identifier, fresh per build.
    """

    user: SignupUser
    device_context: DeviceContext
    marketing_context: MarketingContext
    storefront_context: StorefrontContext
    merchant_local_date: datetime
    customer_local_date: str | None
    signup_id: str = field(default_factory=lambda: str(uuid4()))
    assessment_type: str = ASSESSMENT_TYPE

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the camelCase wire shape expected by the risk API."""
        return {
            "signUpId": self.signup_id,
            "assessmentType": self.assessment_type,
            "user": self.user.to_payload(),
            "merchantLocalDate": _iso(self.merchant_local_date),
            "customerLocalDate": self.customer_local_date,
            "marketingContext": self.marketing_context.to_payload(),
            "storeFrontContext": self.storefront_context.to_payload(),
            "deviceContext": self.device_context.to_payload(),
        }


def build_signup_event(
    request: RegistrationRequest,
    context: RequestContext,
    settings: AssessmentSettings | None = None,
) -> SignupAssessmentEvent:
    """
    Assemble the assessment event for a validated registration.

    Apart from ``signup_id`` the result is fully determined by ``request``,
    ``context`` and ``settings``.
    """
    settings = settings or AssessmentSettings()
    stamp = context.server_time

    address = SignupAddress(
        first_name=request.first_name,
        last_name=request.last_name,
        phone_number=request.phone,
        street1=request.address1,
        street2=request.address2,
        city=request.city,
        state=request.state,
        zip_code=request.zip_code,
        country=request.country_region,
    )
    user = SignupUser(
        user_id=request.email,
        creation_date=stamp,
        update_date=stamp,
        first_name=request.first_name,
        last_name=request.last_name,
        country=request.country_region,
        zip_code=request.zip_code,
        time_zone=format_timezone_offset(request.client_timezone_offset),
        language=settings.language,
        phone_number=request.phone,
        email=request.email,
        address=address,
    )
    return SignupAssessmentEvent(
        user=user,
        device_context=DeviceContext(
            device_context_id=context.correlation_id,
            ip_address=context.ip_address,
            fingerprint=request.fingerprint,
        ),
        marketing_context=MarketingContext(incentive_offer=settings.incentive_offer),
        storefront_context=StorefrontContext(store_name=settings.store_name, market=settings.market),
        merchant_local_date=stamp,
        customer_local_date=request.client_local_date,
    )
