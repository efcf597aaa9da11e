"""DTOs for SignInService."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from storefront.services.identity.dto import AccountOut, SessionOut


@dataclass(frozen=True, slots=True)
class SignInRequest:
    """
    Sign-in form.

    :param email: Login email.
    :param password: Raw password.
    :param remember_me: Keep the session after the browser closes.
    """

    email: str
    password: str
    remember_me: bool = False


@dataclass(frozen=True, slots=True)
class SignedIn:
    account: AccountOut
    session: SessionOut


@dataclass(frozen=True, slots=True)
class InvalidCredentials:
    """Generic failure; never says whether the email or the password was wrong."""

    message: str = "Invalid login attempt."


SignInOutcome: TypeAlias = SignedIn | InvalidCredentials
