"""
IdentityService
===============

SQLAlchemy-backed credential store for storefront accounts:

- Account creation with email uniqueness (email doubles as username)
- Session issuance through a :class:`TokenProvider`
- Credential validation for sign-in
"""

from __future__ import annotations

from datetime import timedelta

from sqlalchemy.exc import IntegrityError

from storefront.models.account import Account
from storefront.repositories.account import AccountRepository
from storefront.services._shared.base import BaseService
from storefront.services._shared.errors import (
    ConflictError,
    CredentialValidationError,
    InvalidCredentialsError,
    violates,
)
from storefront.services._shared.ports import CredentialStore, TokenProvider
from storefront.services.identity.dto import AccountOut, AccountProfileIn, SessionOut

DUPLICATE_EMAIL_MESSAGE = "Email '{email}' is already taken."
DEFAULT_REMEMBER_FOR = timedelta(days=14)


def _to_out(account: Account) -> AccountOut:
    return AccountOut(
        id=account.id,
        email=account.email,
        username=account.username,
        first_name=account.first_name,
        last_name=account.last_name,
    )


class IdentityService(BaseService, CredentialStore):
    """
    Application service for the ``Account`` aggregate.

    Responsibilities
    ----------------
    - Create accounts ensuring email uniqueness.
    - Issue sessions for authenticated accounts.
    - Validate sign-in credentials without revealing which one was wrong.
    """

    def __init__(
        self, tokens: TokenProvider, *, remember_for: timedelta = DEFAULT_REMEMBER_FOR
    ) -> None:
        self.tokens = tokens
        self.remember_for = remember_for

    # --------------------------------------------------------------------- #
    # Creation
    # --------------------------------------------------------------------- #

    def create_account(self, profile: AccountProfileIn, password: str) -> AccountOut:
        """
        Persist a new account whose username is its email.

        :param profile: Profile fields submitted at registration.
        :type profile: AccountProfileIn
        :param password: Raw password; hashed by the model.
        :returns: Public-safe account DTO.
        :rtype: AccountOut
        :raises CredentialValidationError: On duplicate email or invalid values.
        """
        try:
            return self._create(profile, password)
        except ConflictError as exc:
            raise CredentialValidationError((exc.detail,)) from exc
        except ValueError as exc:
            raise CredentialValidationError((str(exc),)) from exc

    def _create(self, profile: AccountProfileIn, password: str) -> AccountOut:
        duplicate = DUPLICATE_EMAIL_MESSAGE.format(email=profile.email)
        with self.rw_uow() as uow:
            repo: AccountRepository = uow.accounts

            if repo.exists_by_email(profile.email):
                raise ConflictError("Account", duplicate)

            try:
                account = repo.model(
                    email=profile.email,
                    username=profile.email,
                    password=password,  # model hashes via setter
                    first_name=profile.first_name,
                    last_name=profile.last_name,
                    phone_number=profile.phone_number,
                    address1=profile.address1,
                    address2=profile.address2,
                    city=profile.city,
                    state=profile.state,
                    zip_code=profile.zip_code,
                    country_region=profile.country_region,
                )
                repo.add(account)
            except IntegrityError as exc:
                if violates(exc, "uq_accounts_email") or violates(exc, "uq_accounts_username"):
                    raise ConflictError("Account", duplicate) from exc
                raise

            return _to_out(account)

    # --------------------------------------------------------------------- #
    # Sessions
    # --------------------------------------------------------------------- #

    def establish_session(self, account: AccountOut, *, persistent: bool = False) -> SessionOut:
        """
        Issue a session token for ``account``.

        :param account: Account to sign in.
        :param persistent: Keep the session beyond the browser session
            ("remember me"); the token then lives for ``remember_for``.
        :returns: Session keyed by the account username.
        :rtype: SessionOut
        """
        expires = self.remember_for if persistent else None
        token = self.tokens.create_access_token(
            identity=account.username,
            additional_claims={"account_id": account.id},
            expires_delta=expires,
            fresh=True,
        )
        return SessionOut(
            identity=account.username,
            access_token=token,
            max_age=int(expires.total_seconds()) if expires else None,
        )

    # --------------------------------------------------------------------- #
    # Authentication
    # --------------------------------------------------------------------- #

    def validate_credentials(self, identifier: str, password: str) -> AccountOut:
        """
        Check an email/password pair.

        :raises InvalidCredentialsError: When the account is unknown or the
            password does not match.
        """
        with self.ro_uow() as uow:
            repo: AccountRepository = uow.accounts
            account = repo.authenticate(identifier, password)
            if account is None:
                raise InvalidCredentialsError()
            return _to_out(account)
