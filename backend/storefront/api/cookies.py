"""Cookie-backed transport for the anonymous basket marker."""

from __future__ import annotations

from flask import Response, current_app, request

from storefront.services._shared.ports import AnonymousBasketMarker


class CookieBasketMarker(AnonymousBasketMarker):
    """
    Read the guest basket reference from the request cookie.

    Clearing is recorded and applied to the outgoing response with
    :meth:`apply`, which expires the cookie on the client.
    """

    def __init__(self, cookie_name: str | None = None) -> None:
        self.cookie_name = cookie_name or current_app.config["BASKET_COOKIE_NAME"]
        self.cleared = False

    def read(self) -> str | None:
        if self.cleared:
            return None
        value = request.cookies.get(self.cookie_name, "").strip()
        return value or None

    def clear(self) -> None:
        self.cleared = True

    def apply(self, response: Response) -> Response:
        if self.cleared:
            response.delete_cookie(self.cookie_name)
        return response
