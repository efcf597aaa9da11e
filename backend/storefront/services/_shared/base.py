# storefront/services/_shared/base.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from storefront.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


def utcnow() -> datetime:
    """Return a timezone-aware "now" in UTC."""
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class RequestContext:
    """
    Per-request facts supplied by the transport layer.

    Services never read the Flask request directly; whatever they need about
    the caller travels in this value.

    :param ip_address: Caller network origin (after proxy resolution).
    :param correlation_id: Device session / correlation identifier.
    :param server_time: Server wall-clock time for this request.
    """

    ip_address: str
    correlation_id: str
    server_time: datetime = field(default_factory=utcnow)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    - Services hold collaborators only, never per-request state.
    """

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork()
