# simplytrack/services/_shared/base.py
from __future__ import annotations

from dataclasses import dataclass

from simplytrack.services._shared.errors import UnauthorizedError
from simplytrack.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data (auth, request ids, client address).

    :param actor_id: Authenticated user identifier.
    :param request_id: Correlation id for logging/tracing.
    :param client_ip: Caller address recorded on audit columns.
    """

    actor_id: str | None = None
    request_id: str | None = None
    client_ip: str | None = None


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
    - Errors are raised as :mod:`simplytrack.services._shared.errors` types and
      translated to HTTP responses by ``simplytrack.core.errors``.
    - Output DTOs are built inside the ``with`` block: the read-only unit of
      work rolls back (and expires loaded rows) on exit.
    """

    DEFAULT_READ_ISOLATION = "READ COMMITTED"

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context (auth, tracing).
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(
        self, *, isolation: str | None = None, enforce_db_readonly: bool = True
    ) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :param isolation: Transaction isolation level (e.g. "READ COMMITTED").
        :type isolation: str | None
        :param enforce_db_readonly: Apply ``SET TRANSACTION READ ONLY`` when supported.
        :type enforce_db_readonly: bool
        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork(
            isolation_level=isolation or self.DEFAULT_READ_ISOLATION,
            enforce_db_readonly=enforce_db_readonly,
        )

    # -------------------------- Context helpers -----------------------------

    def require_actor(self) -> str:
        """
        Return the authenticated user id from the context.

        :returns: Actor id.
        :rtype: str
        :raises UnauthorizedError: When the service runs without an actor.
        """
        if not self.ctx.actor_id:
            raise UnauthorizedError()
        return self.ctx.actor_id
