from __future__ import annotations

import pytest

from storefront.api.v1.account import is_local_url, resolve_return_url


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("/catalog", True),
        ("/", True),
        ("//evil.example", False),
        ("/\\evil.example", False),
        ("https://evil.example/x", False),
        ("catalog", False),
        ("", False),
        (None, False),
    ],
)
def test_is_local_url(url, expected):
    assert is_local_url(url) is expected


def test_checkout_goes_to_basket_only_after_sign_in():
    assert resolve_return_url("/checkout", after_sign_in=True) == "/basket"
    assert resolve_return_url("/checkout") == "/checkout"
    assert resolve_return_url("https://evil.example/checkout", after_sign_in=True) == "/"
