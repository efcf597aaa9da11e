# tests/unit/services/test_session_bootstrap.py
from __future__ import annotations

import logging

import pytest

from storefront.services._shared.ports import InMemoryBasketMarker, InMemoryBasketService
from storefront.services.session.service import SessionBootstrap


@pytest.fixture()
def baskets() -> InMemoryBasketService:
    svc = InMemoryBasketService()
    svc.add_item("guest-1", "sku-a", 1)
    svc.add_item("guest-1", "sku-b", 3)
    svc.add_item("ann@example.com", "sku-a", 2)
    return svc


def test_no_marker_is_a_noop(baskets):
    marker = InMemoryBasketMarker(None)

    SessionBootstrap(baskets).on_authenticated("ann@example.com", marker)

    assert baskets.merges == []
    assert marker.cleared == 0


def test_merge_then_clear_marker(baskets):
    marker = InMemoryBasketMarker("guest-1")

    SessionBootstrap(baskets).on_authenticated("ann@example.com", marker)

    assert baskets.baskets["ann@example.com"] == {"sku-a": 3, "sku-b": 3}
    assert "guest-1" not in baskets.baskets
    assert marker.read() is None
    assert marker.cleared == 1


def test_repeat_call_after_success_is_a_noop(baskets):
    bootstrap = SessionBootstrap(baskets)
    marker = InMemoryBasketMarker("guest-1")

    bootstrap.on_authenticated("ann@example.com", marker)
    bootstrap.on_authenticated("ann@example.com", marker)

    assert len(baskets.merges) == 1
    assert baskets.baskets["ann@example.com"]["sku-a"] == 3


def test_merge_failure_keeps_marker_and_does_not_raise(baskets, caplog):
    baskets.fail = True
    marker = InMemoryBasketMarker("guest-1")

    with caplog.at_level(logging.WARNING):
        SessionBootstrap(baskets).on_authenticated("ann@example.com", marker)

    assert marker.read() == "guest-1"
    assert marker.cleared == 0
    assert any(r.getMessage() == "BasketReconciliationFailed" for r in caplog.records)

    # Next authenticated request retries with the same reference
    baskets.fail = False
    SessionBootstrap(baskets).on_authenticated("ann@example.com", marker)
    assert marker.read() is None
    assert baskets.baskets["ann@example.com"]["sku-b"] == 3


def test_remerging_absent_basket_is_safe():
    baskets = InMemoryBasketService()

    baskets.merge_basket("gone", "ann@example.com")
    baskets.merge_basket("gone", "ann@example.com")

    assert "ann@example.com" not in baskets.baskets


def test_unexpected_merge_error_keeps_marker_and_does_not_raise(baskets, caplog):
    baskets.fail = ConnectionError("basket down")
    marker = InMemoryBasketMarker("guest-1")

    with caplog.at_level(logging.WARNING):
        SessionBootstrap(baskets).on_authenticated("ann@example.com", marker)

    assert marker.read() == "guest-1"
    assert baskets.baskets["guest-1"]["sku-b"] == 3
    assert any(r.getMessage() == "BasketReconciliationFailed" for r in caplog.records)
