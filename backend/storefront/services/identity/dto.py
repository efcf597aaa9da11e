"""
DTOs for the account credential store.

Data Transfer Objects isolate the orchestration services from ORM models,
ensuring clear input/output contracts and type safety.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class AccountProfileIn:
    """
    Profile fields persisted with a new account.

    :param email: Login email; also used as the username.
    :param first_name: Given name.
    :param last_name: Family name.
    :param phone_number: Optional contact phone.
    :param address1: First address line.
    :param address2: Second address line.
    :param city: City.
    :param state: State / province.
    :param zip_code: Postal code.
    :param country_region: Country or region.
    """

    email: str
    first_name: str
    last_name: str
    phone_number: str | None = None
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country_region: str | None = None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class AccountOut:
    """
    Public-safe account representation (no credentials).

    :param id: Account identifier.
    :param email: Normalized login email.
    :param username: Authentication identity (the email).
    :param first_name: Given name.
    :param last_name: Family name.
    """

    id: int
    email: str
    username: str
    first_name: str
    last_name: str


@dataclass(frozen=True, slots=True)
class SessionOut:
    """
    Authenticated session issued for an account.

    :param identity: Identity key the session was issued for (the username).
    :param access_token: Encoded session token handed to the transport layer.
    :param max_age: Cookie lifetime in seconds for persistent sessions;
        ``None`` keeps the session cookie tied to the browser session.
    """

    identity: str
    access_token: str
    max_age: int | None = None
