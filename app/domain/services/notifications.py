# app/domain/services/notifications.py
from __future__ import annotations
import logging
from typing import Protocol

from app.domain.models.order import Order

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    "processing": "Estamos preparando tu pedido",
    "shipped": "Tu pedido va en camino",
    "delivered": "Tu pedido fue entregado",
    "cancelled": "Tu pedido fue cancelado",
}


class NotificationDispatcher(Protocol):
    async def notify_status_change(self, order: Order, previous_status: str) -> None: ...


def build_status_message(order: Order) -> str:
    status = getattr(order.status, "value", order.status)
    msg = STATUS_MESSAGES.get(status, f"Estado actualizado: {status}")
    if status == "shipped" and order.tracking_number:
        msg += f" (guía {order.tracking_number})"
    return msg


class LoggingNotificationDispatcher:
    """
    Default dispatcher: no mail transport is wired in this service,
    so the customer message is only logged.
    """

    async def notify_status_change(self, order: Order, previous_status: str) -> None:
        if not order.customer_email:
            logger.info("notify skipped order_id=%s reason=no_email", order.order_id)
            return
        logger.info(
            "notify order_id=%s to=%s %s -> %s msg=%s",
            order.order_id, order.customer_email, previous_status,
            getattr(order.status, "value", order.status), build_status_message(order),
        )
