from __future__ import annotations

from typing import Protocol

from storefront.services._shared.errors import CredentialValidationError, InvalidCredentialsError
from storefront.services.identity.dto import AccountOut, AccountProfileIn, SessionOut

from .token_provider import StubTokenProvider, TokenProvider

REMEMBER_ME_MAX_AGE = 14 * 24 * 60 * 60


class CredentialStore(Protocol):
    """
    Port for the identity subsystem that owns accounts and sessions.

    Implementations enforce email uniqueness themselves; callers never
    de-duplicate.
    """

    def create_account(self, profile: AccountProfileIn, password: str) -> AccountOut:
        """
        Persist a new account.

        :raises CredentialValidationError: When the store refuses the profile
            (duplicate email, invalid values).
        """

    def establish_session(self, account: AccountOut, *, persistent: bool = False) -> SessionOut:
        """Issue an authenticated session; ``persistent`` outlives the browser session."""

    def validate_credentials(self, identifier: str, password: str) -> AccountOut:
        """
        Check ``identifier``/``password``.

        :raises InvalidCredentialsError: On any mismatch.
        """


class InMemoryCredentialStore(CredentialStore):
    """Dictionary-backed credential store for unit tests. Passwords stay in clear."""

    def __init__(self, tokens: TokenProvider | None = None) -> None:
        self.tokens = tokens or StubTokenProvider()
        self._accounts: dict[str, tuple[AccountOut, str]] = {}
        self.create_calls = 0
        self.sessions: list[SessionOut] = []

    @property
    def accounts(self) -> list[AccountOut]:
        return [account for account, _ in self._accounts.values()]

    def create_account(self, profile: AccountProfileIn, password: str) -> AccountOut:
        self.create_calls += 1
        email = profile.email.strip().lower()
        if email in self._accounts:
            raise CredentialValidationError((f"Email '{email}' is already taken.",))
        account = AccountOut(
            id=len(self._accounts) + 1,
            email=email,
            username=email,
            first_name=profile.first_name,
            last_name=profile.last_name,
        )
        self._accounts[email] = (account, password)
        return account

    def establish_session(self, account: AccountOut, *, persistent: bool = False) -> SessionOut:
        token = self.tokens.create_access_token(identity=account.username, fresh=True)
        session = SessionOut(
            identity=account.username,
            access_token=token,
            max_age=REMEMBER_ME_MAX_AGE if persistent else None,
        )
        self.sessions.append(session)
        return session

    def validate_credentials(self, identifier: str, password: str) -> AccountOut:
        entry = self._accounts.get(identifier.strip().lower())
        if entry is None or entry[1] != password:
            raise InvalidCredentialsError()
        return entry[0]
