from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class StatusHistoryEntry(BaseModel):
    status: OrderStatus
    timestamp: datetime
    notes: str = ""
    changed_by: str = "admin"

    model_config = {"frozen": True, "use_enum_values": True}


class Order(BaseModel):
    """
    Order fields the status workflow reads or writes.
    Items, totals and payment state live in the same document but are owned
    by other flows; extra keys are kept so a round trip does not drop them.
    """
    order_id: str
    status: OrderStatus = OrderStatus.PENDING
    status_history: List[StatusHistoryEntry] = Field(default_factory=list)
    tracking_number: Optional[str] = None
    customer_email: Optional[str] = None
    updated_at: Optional[datetime] = None

    model_config = {"frozen": True, "use_enum_values": True, "extra": "allow"}

    @field_validator("status", mode="before")
    @classmethod
    def _null_status_is_pending(cls, v):
        # legacy documents were written without a status
        return OrderStatus.PENDING.value if v is None else v

    @field_validator("status_history", mode="before")
    @classmethod
    def _null_history_is_empty(cls, v):
        return [] if v is None else v
