"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`storefront.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``storefront.services._shared.base``)
    * :class:`BaseService`
    * :class:`RequestContext`

- Identity service (from ``storefront.services.identity``)
    * :class:`IdentityService`, the SQLAlchemy credential store
    * DTOs: :class:`AccountProfileIn`, :class:`AccountOut`, :class:`SessionOut`

- Registration (from ``storefront.services.registration``)
    * :class:`SignupRegistrationService`
    * DTOs: :class:`RegistrationRequest` and the outcome variants

- Sign-in (from ``storefront.services.signin``)
    * :class:`SignInService`

- Session bootstrap (from ``storefront.services.session``)
    * :class:`SessionBootstrap`
"""

from __future__ import annotations

# Base primitives (service base + request-scoped context)
from ._shared.base import BaseService, RequestContext

# Identity service + DTOs
from .identity.dto import AccountOut, AccountProfileIn, SessionOut
from .identity.service import IdentityService

# Registration service + DTOs
from .registration.dto import (
    Approved,
    AssessmentUnavailable,
    CredentialCreationFailed,
    RegistrationOutcome,
    RegistrationRequest,
    Rejected,
    ValidationFailed,
)
from .registration.service import SignupRegistrationService

# Session bootstrap + sign-in
from .session.service import SessionBootstrap
from .signin import InvalidCredentials, SignedIn, SignInRequest, SignInService

__all__ = [
    "AccountOut",
    "AccountProfileIn",
    "Approved",
    "AssessmentUnavailable",
    "BaseService",
    "CredentialCreationFailed",
    "IdentityService",
    "InvalidCredentials",
    "RegistrationOutcome",
    "RegistrationRequest",
    "Rejected",
    "RequestContext",
    "SessionBootstrap",
    "SessionOut",
    "SignInRequest",
    "SignInService",
    "SignedIn",
    "SignupRegistrationService",
    "ValidationFailed",
]
