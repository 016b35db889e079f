# app/domain/repositories/order_repo.py

from __future__ import annotations
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from app.domain.models.order import Order, OrderStatus

def status_precondition(expected_status: str):
    """
    Mongo filter value matching `expected_status`.
    Orders stored without a status (null or missing field) read as pending,
    so they must also match as pending; `None` covers both cases in Mongo.
    """
    if expected_status == OrderStatus.PENDING.value:
        return {"$in": [OrderStatus.PENDING.value, None]}
    return expected_status

class OrderRepo:
    """
    Order store backed by the 'orders' collection.
    Status writes are conditional on the status that was read, so two
    concurrent transitions cannot both win.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "orders"):
        self.col = db[collection_name]

    async def get(self, order_id: str) -> Optional[Order]:
        doc = await self.col.find_one({"order_id": order_id}, {"_id": 0})
        return Order.model_validate(doc) if doc else None

    async def update_status_if_current(self, order: Order, expected_status: str) -> Optional[Order]:
        """
        Persist status, history, tracking number and updated_at of `order`
        only if the stored status still equals `expected_status`.
        Returns the stored order, or None when the precondition failed.
        """
        data = order.model_dump(mode="python", include={"status", "status_history", "tracking_number", "updated_at"})
        if data.get("tracking_number") is None:
            data.pop("tracking_number", None)
        doc = await self.col.find_one_and_update(
            {"order_id": order.order_id, "status": status_precondition(expected_status)},
            {"$set": data},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            return None
        doc.pop("_id", None)
        return Order.model_validate(doc)
