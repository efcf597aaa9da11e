"""Storefront account model (authentication identity + shipping profile)."""

from __future__ import annotations

from typing import Any

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates
from werkzeug.security import check_password_hash, generate_password_hash

from storefront.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class Account(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Customer account created once a signup has been approved.

    Fields
    ------
    email : str
        Login email. Stored normalized (lowercase, trimmed).
    username : str
        Authentication identity; the storefront uses the email.
    password_hash : str
        Hashed password (write-only setter via ``password``).
    first_name, last_name : str
        Customer name as submitted at registration.
    phone_number : str | None
        Optional contact phone.
    address1, address2, city, state, zip_code, country_region : str | None
        Postal address submitted at registration.
    """

    __tablename__ = "accounts"

    email: Mapped[str] = mapped_column(String(254), nullable=False, index=True)
    username: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone_number: Mapped[str | None] = mapped_column(String(32), nullable=True)

    address1: Mapped[str | None] = mapped_column(String(200), nullable=True)
    address2: Mapped[str | None] = mapped_column(String(200), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    zip_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    country_region: Mapped[str | None] = mapped_column(String(100), nullable=True)

    __table_args__ = (
        UniqueConstraint("email", name="uq_accounts_email"),
        UniqueConstraint("username", name="uq_accounts_username"),
    )

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """
        Disallow reading passwords.

        :raises AttributeError: Always, to ensure password is write-only.
        """
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        """
        Hash and set the password.

        :param raw: Plain text password to hash.
        :type raw: str
        """
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password candidate.
        :type raw: str
        :returns: ``True`` if it matches; otherwise ``False``.
        :rtype: bool
        """
        if not self.password_hash:
            return False
        return bool(check_password_hash(self.password_hash, raw))

    # -------------------- Validators --------------------
    @validates("email", "username")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate the login email (also used as username).

        :raises ValueError: If the value is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError(f"{key.capitalize()} is required.")
        v = value.strip().lower()
        # Minimal sanity check; full validation happens before the risk check.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError(f"{key.capitalize()} format looks invalid.")
        return v
