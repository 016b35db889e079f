# app/domain/services/order_status_svc.py
import logging
import time
from typing import Optional

from app.core.config import get_settings
from app.domain.errors import OrderNotFound, OrderStatusConflict
from app.domain.models.order import Order
from app.domain.repositories.order_repo import OrderRepo
from app.domain.services.constants import DEFAULT_ACTOR
from app.domain.services.notifications import NotificationDispatcher
from app.domain.services.order_status_guard import TransitionResult, apply_transition

logger = logging.getLogger(__name__)

async def get_order(order_repo: OrderRepo, order_id: str) -> Order:
    order = await order_repo.get(order_id)
    if order is None:
        raise OrderNotFound(order_id)
    return order

async def change_order_status(
    order_repo: OrderRepo,
    *,
    order_id: str,
    status: str,
    notes: Optional[str] = None,
    tracking_number: Optional[str] = None,
    changed_by: str = DEFAULT_ACTOR,
    max_attempts: Optional[int] = None,
) -> TransitionResult:
    """
    Read the order, validate the transition, write it back conditionally.

    When another writer changed the status between read and write, the order
    is re-read and the transition is validated again against the fresh status
    (which may now raise InvalidTransition). After `max_attempts` lost races
    OrderStatusConflict is raised. At least one attempt is always made.
    """
    t0 = time.perf_counter()
    attempts = max(1, max_attempts or get_settings().order_status_max_retries)

    result: Optional[TransitionResult] = None
    for attempt in range(1, attempts + 1):
        order = await get_order(order_repo, order_id)
        result = apply_transition(
            order, status, notes, tracking_number, changed_by=changed_by,
        )
        stored = await order_repo.update_status_if_current(result.order, result.previous_status)
        if stored is not None:
            result = TransitionResult(order=stored, previous_status=result.previous_status, entry=result.entry)
            break
        logger.warning(
            "order status race order_id=%s expected=%s attempt=%s/%s",
            order_id, result.previous_status, attempt, attempts,
        )
    else:
        raise OrderStatusConflict(order_id, attempts)

    logger.info(
        "order status changed order_id=%s %s -> %s by=%s history=%s time=%.3fs",
        order_id, result.previous_status, result.entry.status, changed_by,
        len(result.order.status_history), time.perf_counter() - t0,
    )
    return result

async def notify_status_change(
    notifier: NotificationDispatcher,
    order: Order,
    previous_status: str,
) -> None:
    """
    Fire-and-forget customer notification, run after the response is sent.
    Failures are logged; the status change already stands.
    """
    try:
        await notifier.notify_status_change(order, previous_status)
    except Exception as e:
        logger.warning("notify failed order_id=%s err=%s", order.order_id, e)
