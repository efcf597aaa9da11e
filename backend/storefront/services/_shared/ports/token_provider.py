from __future__ import annotations

from datetime import timedelta
from typing import Any, Protocol


class TokenProvider(Protocol):
    """Port for issuing session tokens."""

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
        fresh: bool = False,
    ) -> str: ...


class StubTokenProvider(TokenProvider):
    """Deterministic token provider used in unit tests."""

    def __init__(self) -> None:
        self._seq = 0
        self.claims: dict[str, dict[str, Any]] = {}

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
        fresh: bool = False,
    ) -> str:
        self._seq += 1
        token = f"access.{identity}.{self._seq}"
        payload: dict[str, Any] = {"sub": identity, "type": "access", "fresh": bool(fresh)}
        if expires_delta is not None:
            payload["expires_delta"] = expires_delta
        if additional_claims:
            payload.update(additional_claims)
        self.claims[token] = payload
        return token

    @property
    def issued(self) -> list[str]:
        """Tokens issued so far, in order."""
        return list(self.claims)
