from typing import Sequence


class ProductNotFound(Exception):
    def __init__(self, product_id: str):
        super().__init__(f"product not found: {product_id}")
        self.product_id = product_id


class OrderNotFound(Exception):
    def __init__(self, order_id: str):
        super().__init__(f"order not found: {order_id}")
        self.order_id = order_id


class InvalidTransition(Exception):
    """Requested status is not reachable from the current one."""

    def __init__(self, from_status: str, to_status: str, allowed: Sequence[str]):
        super().__init__(f"transition not allowed: {from_status} -> {to_status}")
        self.from_status = from_status
        self.to_status = to_status
        self.allowed = list(allowed)

    def to_dict(self) -> dict:
        return {
            "error": str(self),
            "from_status": self.from_status,
            "to_status": self.to_status,
            "allowed_transitions": self.allowed,
        }


class OrderStatusConflict(Exception):
    """Concurrent writers kept changing the order status under us."""

    def __init__(self, order_id: str, attempts: int):
        super().__init__(f"order {order_id} changed concurrently ({attempts} attempts)")
        self.order_id = order_id
        self.attempts = attempts
