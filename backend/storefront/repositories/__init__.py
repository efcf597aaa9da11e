"""Repository package exposing persistence-layer access for account models."""

from __future__ import annotations

from storefront.repositories.account import AccountRepository
from storefront.repositories.base import BaseRepository

__all__ = ["AccountRepository", "BaseRepository"]
