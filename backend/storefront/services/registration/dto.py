"""
DTOs for SignupRegistrationService.

Contracts for the fraud-gated self-registration flow: the submitted form,
and the single outcome each attempt resolves to.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias

from storefront.services.identity.dto import AccountOut, AccountProfileIn, SessionOut

# --------------------------------------------------------------------------- #
# Input
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class RegistrationRequest:
    """
    Registration form as submitted by the client.

    Values are taken as-is from the transport layer; the service validates
    them before any external call.

    :param email: Login email (also the username).
    :type email: str
    :param password: Raw password.
    :type password: str
    :param first_name: Given name.
    :param last_name: Family name.
    :param address1: First address line.
    :param city: City.
    :param zip_code: Postal code.
    :param country_region: Country or region.
    :param address2: Optional second address line.
    :param state: Optional state / province.
    :param phone: Optional contact phone.
    :param fingerprint: Device fingerprinting token collected by the page.
    :param client_timezone_offset: Browser ``getTimezoneOffset()`` in minutes.
    :type client_timezone_offset: int | None
    :param client_local_date: Client-reported local date, recorded verbatim.
    :type client_local_date: str | None
    """

    email: str
    password: str
    first_name: str
    last_name: str
    address1: str
    city: str
    zip_code: str
    country_region: str
    address2: str | None = None
    state: str | None = None
    phone: str | None = None
    fingerprint: str | None = None
    client_timezone_offset: int | None = 0
    client_local_date: str | None = None

    def to_profile(self) -> AccountProfileIn:
        """Project the profile fields persisted with the account."""
        return AccountProfileIn(
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            phone_number=self.phone,
            address1=self.address1,
            address2=self.address2,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
            country_region=self.country_region,
        )


# --------------------------------------------------------------------------- #
# Outcomes
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class Approved:
    """
    Signup approved: the account exists and a session was established.

    :param account: Public-safe account payload.
    :param session: Session issued for the new account.
    """

    account: AccountOut
    session: SessionOut


@dataclass(frozen=True, slots=True)
class Rejected:
    """
    Signup denied by risk policy. Not a fault; nothing was created.

    :param reason: User-facing reason (never carries the score).
    """

    reason: str = "Signup rejected by Fraud Protection"


@dataclass(frozen=True, slots=True)
class ValidationFailed:
    """
    Submitted form is structurally invalid; no external call was made.

    :param fields: Field name -> list of messages.
    """

    fields: dict[str, list[str]] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class AssessmentUnavailable:
    """
    Risk assessment could not be obtained; the attempt was aborted.

    The caller may resubmit, which is assessed as a brand-new event.
    """

    detail: str = "Signup could not be verified right now. Please try again."


@dataclass(frozen=True, slots=True)
class CredentialCreationFailed:
    """
    Approved by risk policy but refused by the credential store.

    :param errors: Messages reported by the store (e.g. duplicate email).
    """

    errors: tuple[str, ...] = ()


RegistrationOutcome: TypeAlias = (
    Approved | Rejected | ValidationFailed | AssessmentUnavailable | CredentialCreationFailed
)
