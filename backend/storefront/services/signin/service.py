"""
SignInService
=============

Thin flow for returning users: validate credentials, establish the session,
then run the same post-authentication bootstrap as registration.
"""

from __future__ import annotations

import logging

from storefront.services._shared.errors import InvalidCredentialsError
from storefront.services._shared.ports import AnonymousBasketMarker, CredentialStore
from storefront.services.session.service import SessionBootstrap
from storefront.services.signin.dto import InvalidCredentials, SignedIn, SignInOutcome, SignInRequest

logger = logging.getLogger(__name__)


class SignInService:
    def __init__(self, credentials: CredentialStore, bootstrap: SessionBootstrap) -> None:
        self.credentials = credentials
        self.bootstrap = bootstrap

    def sign_in(self, request: SignInRequest, marker: AnonymousBasketMarker) -> SignInOutcome:
        """
        Authenticate ``request`` and reconcile the guest basket on success.

        :returns: :class:`SignedIn` or a generic :class:`InvalidCredentials`.
        """
        try:
            account = self.credentials.validate_credentials(request.email, request.password)
        except InvalidCredentialsError as exc:
            logger.info("Sign-in refused", extra={"outcome": "invalid_credentials"})
            return InvalidCredentials(message=str(exc))

        session = self.credentials.establish_session(account, persistent=request.remember_me)
        self.bootstrap.on_authenticated(account.username, marker)
        logger.info("Signed in", extra={"outcome": "signed_in", "identity": account.username})
        return SignedIn(account=account, session=session)
