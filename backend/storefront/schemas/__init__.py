"""Convenience exports for application schemas."""

from __future__ import annotations

from .account import AccountSchema, RegisterSchema, SignInSchema

__all__ = [
    "AccountSchema",
    "RegisterSchema",
    "SignInSchema",
]
