"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never depend on Flask or
HTTP. They are the contracts between collaborators (risk client, credential
store, basket service) and the orchestrating services, which turn the
expected ones into outcome values.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_accounts_email').

    Returns
    -------
    bool
        True if the IntegrityError message mentions the constraint. SQLite
        reports the column instead, so ``accounts.email`` style names match too.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    if constraint_name.lower() in message:
        return True
    # uq_<table>_<column> -> "<table>.<column>" (SQLite wording)
    parts = constraint_name.lower().split("_", 2)
    return len(parts) == 3 and f"{parts[1]}.{parts[2]}" in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The API layer translates outcomes and these errors to ``APIError``.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "Account").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:  # pragma: no cover
        return f"Conflict on {self.entity}: {self.detail}"


@dataclass(slots=True)
class CredentialValidationError(ServiceError):
    """
    Raised by the credential store when it refuses the submitted profile.

    :param errors: Human-readable messages safe to show to the user.
    :type errors: tuple[str, ...]
    """

    errors: tuple[str, ...] = field(default_factory=tuple)

    def __str__(self) -> str:  # pragma: no cover
        return "; ".join(self.errors) or "Account could not be created"


class AssessmentUnavailableError(ServiceError):
    """
    Raised when the risk assessment could not be obtained.

    Covers transport failures, non-success responses and successful calls
    whose body carries no usable risk score.
    """

    def __init__(self, message: str = "Risk assessment unavailable") -> None:
        super().__init__(message)


class BasketReconciliationError(ServiceError):
    """Raised when an anonymous basket could not be merged into a named basket."""

    def __init__(self, message: str = "Basket reconciliation failed") -> None:
        super().__init__(message)


class InvalidCredentialsError(ServiceError):
    """Raised on a failed sign-in; never says which credential was wrong."""

    def __init__(self, message: str = "Invalid login attempt.") -> None:
        super().__init__(message)
