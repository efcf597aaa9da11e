# storefront/infra/redis/redis_basket_store.py
from __future__ import annotations

from typing import Any

from redis import Redis
from redis.exceptions import RedisError

from storefront.services._shared.errors import BasketReconciliationError
from storefront.services._shared.ports import BasketReconciliationService

DEFAULT_TTL_SECONDS = 60 * 60 * 24 * 30  # 30 days


class RedisBasketStore(BasketReconciliationService):
    """
    Baskets stored as Redis hashes.

    Keys
    ----
    - ``basket:{buyer_id}``  -> HASH {sku: quantity}

    Guest baskets are keyed by the anonymous reference carried in the basket
    cookie; named baskets by the username.
    """

    def __init__(self, r: Redis, *, ttl_seconds: int = DEFAULT_TTL_SECONDS, prefix: str = "basket") -> None:
        self.r = r
        self.ttl = ttl_seconds
        self.prefix = prefix

    def _key(self, buyer_id: str) -> str:
        return f"{self.prefix}:{buyer_id}"

    def add_item(self, buyer_id: str, sku: str, quantity: int = 1) -> int:
        """Add ``quantity`` of ``sku``; returns the new line quantity."""
        key = self._key(buyer_id)
        pipe = self.r.pipeline(transaction=True)
        pipe.hincrby(key, sku, quantity)
        pipe.expire(key, self.ttl)
        new_qty, _ = pipe.execute()
        return int(new_qty)

    def get_items(self, buyer_id: str) -> dict[str, int]:
        raw: dict[Any, Any] = self.r.hgetall(self._key(buyer_id))  # type: ignore[assignment]
        return {str(k): int(v) for k, v in raw.items()}

    def merge_basket(self, anonymous_ref: str, identity_key: str) -> None:
        """
        Sum every guest line into the named basket and drop the guest basket.

        Idempotent: once the guest hash is gone there is nothing to merge.
        Concurrent merges of the same guest basket are serialized with
        WATCH so lines are never added twice.
        """
        if anonymous_ref == identity_key:
            return
        src = self._key(anonymous_ref)
        dst = self._key(identity_key)
        try:
            with self.r.pipeline(transaction=True) as pipe:
                pipe.watch(src)
                lines: dict[Any, Any] = pipe.hgetall(src)  # type: ignore[assignment]
                if not lines:
                    pipe.unwatch()
                    return
                pipe.multi()
                for sku, qty in lines.items():
                    pipe.hincrby(dst, sku, int(qty))
                pipe.expire(dst, self.ttl)
                pipe.delete(src)
                pipe.execute()
        except (RedisError, ValueError) as exc:
            # WatchError included: another request merged first, the caller retries later.
            # ValueError: a non-integer quantity in the stored hash.
            raise BasketReconciliationError(f"Basket merge failed: {type(exc).__name__}") from exc
