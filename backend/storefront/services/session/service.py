"""
SessionBootstrap
================

Post-authentication hook shared by sign-in and registration: reconciles the
guest basket into the authenticated identity's basket.
"""

from __future__ import annotations

import logging

from storefront.services._shared.ports import AnonymousBasketMarker, BasketReconciliationService

logger = logging.getLogger(__name__)


class SessionBootstrap:
    """
    Merge the anonymous basket once a caller is authenticated.

    The marker is cleared only after the merge succeeded. A failed merge is
    logged and swallowed so authentication is never undone; the marker stays
    on the client and the next authenticated request retries.
    """

    def __init__(self, baskets: BasketReconciliationService) -> None:
        self.baskets = baskets

    def on_authenticated(self, identity_key: str, marker: AnonymousBasketMarker) -> None:
        """
        Reconcile the basket referenced by ``marker`` into ``identity_key``.

        :param identity_key: Authenticated username (the email).
        :param marker: Client-held anonymous basket marker.
        """
        anonymous_ref = marker.read()
        if not anonymous_ref:
            return

        try:
            self.baskets.merge_basket(anonymous_ref, identity_key)
        except Exception:
            logger.warning(
                "BasketReconciliationFailed",
                exc_info=True,
                extra={"identity": identity_key, "outcome": "basket_kept"},
            )
            return

        marker.clear()
        logger.info("Basket reconciled", extra={"identity": identity_key, "outcome": "merged"})
