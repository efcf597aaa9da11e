from __future__ import annotations

from collections import Counter
from typing import Protocol

from storefront.services._shared.errors import BasketReconciliationError


class BasketReconciliationService(Protocol):
    """
    Port for the basket service that owns guest and named baskets.

    ``merge_basket`` MUST be idempotent: merging an anonymous basket that is
    already merged or does not exist is a no-op.
    """

    def merge_basket(self, anonymous_ref: str, identity_key: str) -> None:
        """
        Move every line of basket ``anonymous_ref`` into ``identity_key``'s basket.

        :raises BasketReconciliationError: When the merge did not happen.
        """


class AnonymousBasketMarker(Protocol):
    """Client-held marker naming the pre-authentication basket."""

    def read(self) -> str | None:
        """Return the anonymous basket reference, if the client carries one."""

    def clear(self) -> None:
        """Invalidate the marker on the client."""


class InMemoryBasketService(BasketReconciliationService):
    """Dictionary-backed basket service for unit tests."""

    def __init__(self, *, fail: bool | Exception = False) -> None:
        self.baskets: dict[str, Counter[str]] = {}
        self.fail = fail
        self.merges: list[tuple[str, str]] = []

    def add_item(self, buyer_id: str, sku: str, quantity: int = 1) -> None:
        self.baskets.setdefault(buyer_id, Counter())[sku] += quantity

    def merge_basket(self, anonymous_ref: str, identity_key: str) -> None:
        self.merges.append((anonymous_ref, identity_key))
        if isinstance(self.fail, Exception):
            raise self.fail
        if self.fail:
            raise BasketReconciliationError(f"basket service refused merge of {anonymous_ref!r}")
        source = self.baskets.pop(anonymous_ref, None)
        if not source:
            return
        self.baskets.setdefault(identity_key, Counter()).update(source)


class InMemoryBasketMarker(AnonymousBasketMarker):
    """Marker double; ``value`` is what the client currently holds."""

    def __init__(self, value: str | None = None) -> None:
        self.value = value
        self.cleared = 0

    def read(self) -> str | None:
        return self.value or None

    def clear(self) -> None:
        self.value = None
        self.cleared += 1
