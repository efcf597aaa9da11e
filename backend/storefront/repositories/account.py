"""Account repository for persistence and credential lookups."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from storefront.models.account import Account
from storefront.repositories.base import BaseRepository


class AccountRepository(BaseRepository[Account]):
    """Persistence-only repository for :class:`Account`.

    It NEVER issues sessions or talks to the risk service; only DB-level
    account management.
    """

    model = Account

    def get_by_email(self, email: str) -> Account | None:
        """Fetch an account by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: Account instance or ``None`` when not found.
        :rtype: Account | None
        """
        stmt = select(Account).where(Account.email == email.lower().strip())
        result = self.session.execute(stmt).scalars().first()
        return cast(Account | None, result)

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when an account with the provided email exists."""
        stmt = select(Account.id).where(Account.email == email.lower().strip())
        return bool(self.session.execute(stmt).first())

    def authenticate(self, email: str, password: str) -> Account | None:
        """Return the account when ``password`` matches, else ``None``.

        Unknown emails and wrong passwords are indistinguishable to callers.
        """
        account = self.get_by_email(email)
        if not account or not account.verify_password(password):
            return None
        return account
