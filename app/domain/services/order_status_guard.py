# app/domain/services/order_status_guard.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from app.domain.errors import InvalidTransition
from app.domain.models.order import Order, StatusHistoryEntry
from app.domain.services.constants import (
    ALLOWED_TRANSITIONS,
    DEFAULT_ACTOR,
    TERMINAL_STATUSES,
    TRACKED_STATUS,
)


@dataclass(frozen=True)
class TransitionResult:
    order: Order                 # order after the transition
    previous_status: str
    entry: StatusHistoryEntry    # the appended history record


def _status_value(status) -> str:
    return getattr(status, "value", status)


def allowed_transitions(status) -> List[str]:
    """Next statuses reachable from `status` (empty for terminal or unknown statuses)."""
    return list(ALLOWED_TRANSITIONS.get(_status_value(status), ()))


def is_terminal(status) -> bool:
    return _status_value(status) in TERMINAL_STATUSES


def apply_transition(
    order: Order,
    requested_status,
    notes: Optional[str] = None,
    tracking_number: Optional[str] = None,
    *,
    changed_by: str = DEFAULT_ACTOR,
    now: Optional[datetime] = None,
) -> TransitionResult:
    """
    Validate `order.status -> requested_status` and build the updated order.

    The input order is left untouched; the result carries a copy with one
    history entry appended, the new status, and the tracking number when the
    order moves to shipped. Raises InvalidTransition when the move is illegal.
    """
    current = _status_value(order.status)
    target = _status_value(requested_status)
    allowed = allowed_transitions(current)
    if target not in allowed:
        raise InvalidTransition(current, target, allowed)

    ts = now or datetime.now(timezone.utc)
    entry = StatusHistoryEntry(
        status=target,
        timestamp=ts,
        notes=notes or "",
        changed_by=changed_by,
    )

    update = {
        "status": target,
        "status_history": [*order.status_history, entry],
        "updated_at": ts,
    }
    if tracking_number and target == TRACKED_STATUS:
        update["tracking_number"] = tracking_number

    return TransitionResult(
        order=order.model_copy(update=update),
        previous_status=current,
        entry=entry,
    )
