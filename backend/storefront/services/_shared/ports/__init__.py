"""
storefront.services._shared.ports
=================================

*Ports* (hexagonal interfaces) for the collaborators the identity flows
depend on but do not own.

Modules
-------
- :mod:`risk_assessment`:
    :class:`~.RiskAssessmentClient` and :class:`~.AssessmentDecision`.
- :mod:`credential_store`:
    :class:`~.CredentialStore`, accounts and sessions.
- :mod:`basket`:
    :class:`~.BasketReconciliationService` and the client-held
    :class:`~.AnonymousBasketMarker`.
- :mod:`token_provider`:
    :class:`~.TokenProvider` used by the credential store to issue sessions.

Concrete adapters (HTTP, Redis, SQLAlchemy, JWT) live under
``storefront.infra`` and ``storefront.services.identity``.
"""

from __future__ import annotations

from .basket import (
    AnonymousBasketMarker,
    BasketReconciliationService,
    InMemoryBasketMarker,
    InMemoryBasketService,
)
from .credential_store import CredentialStore, InMemoryCredentialStore
from .risk_assessment import AssessmentDecision, RiskAssessmentClient, StubRiskAssessmentClient
from .token_provider import StubTokenProvider, TokenProvider

__all__ = [
    "AnonymousBasketMarker",
    "AssessmentDecision",
    "BasketReconciliationService",
    "CredentialStore",
    "InMemoryCredentialStore",
    "InMemoryBasketMarker",
    "InMemoryBasketService",
    "RiskAssessmentClient",
    "StubRiskAssessmentClient",
    "StubTokenProvider",
    "TokenProvider",
]
