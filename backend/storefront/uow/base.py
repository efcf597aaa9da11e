"""
Abstract Unit of Work contracts.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from storefront.repositories import AccountRepository


class UnitOfWork(ABC):
    """
    Transactional boundary for one credential-store operation.

    Exposes ``accounts`` bound to the UoW session. Writers commit on a clean
    exit and roll back on error; readers never commit.
    """

    accounts: AccountRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...
    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...
    @abstractmethod
    def commit(self) -> None: ...
    @abstractmethod
    def rollback(self) -> None: ...
