# api/v1/schemas/orders.py
from pydantic import BaseModel
from typing import List, Literal, Optional

from app.domain.models.order import Order

StatusName = Literal["pending", "processing", "shipped", "delivered", "cancelled"]

class ChangeStatusIn(BaseModel):
    status: StatusName
    notes: Optional[str] = None
    notify_customer: bool = False
    tracking_number: Optional[str] = None

class ChangeStatusOut(BaseModel):
    message: str
    order: Order

class TransitionsOut(BaseModel):
    order_id: str
    status: str
    allowed_transitions: List[str]
    terminal: bool
