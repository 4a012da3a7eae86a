"""
Aggregate maintenance for workout sessions.

``total_weight``, ``total_reps`` and ``sets_count`` are denormalized onto the
session row. They are recomputed from scratch (never adjusted incrementally)
as the last step of every set mutation, inside the mutation's transaction.
"""

from __future__ import annotations

import logging

from simplytrack.repositories.workout import SetTotals
from simplytrack.services._shared.errors import NotFoundError
from simplytrack.uow.base import UnitOfWork

log = logging.getLogger(__name__)


def recompute_session_totals(uow: UnitOfWork, session_id: str) -> SetTotals:
    """
    Overwrite a session's totals with the aggregates of its live sets.

    :param uow: Active read-write unit of work holding the set mutation.
    :type uow: UnitOfWork
    :param session_id: Session whose totals are refreshed.
    :type session_id: str
    :returns: The totals written.
    :rtype: SetTotals
    :raises NotFoundError: If the session disappeared.
    """
    # pending set inserts/updates/deletes must be visible to the aggregate query
    uow.workout_sets.flush()

    session = uow.workout_sessions.get_for_update(session_id)
    if session is None:
        raise NotFoundError("Session", session_id)

    totals = uow.workout_sessions.totals_of(session_id)
    session.sets_count = totals.sets_count
    session.total_reps = totals.total_reps
    session.total_weight = totals.total_weight
    uow.workout_sessions.flush()

    log.debug(
        "Session totals recomputed: sets=%d reps=%d weight=%.2f",
        totals.sets_count,
        totals.total_reps,
        totals.total_weight,
        extra={"event": "session.totals"},
    )
    return totals
