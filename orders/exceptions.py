"""
Order errors.

    OrderValidationError    selection or contact fields failed (field -> message)
    CapacityError           slots are full and ordering is closed
    OrderNotFoundError      transition target does not exist
    InvalidTransitionError  action not allowed from the order's status
    PersistenceError        the database write or read failed
"""
from typing import Dict, Optional


class OrderError(Exception):
    """Base class for order errors."""
    pass


class OrderValidationError(OrderError):
    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))


class CapacityError(OrderError):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class OrderNotFoundError(OrderError):
    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found")


class InvalidTransitionError(OrderError):
    def __init__(self, status: str, action: str, order_id: Optional[int] = None):
        self.status = status
        self.action = action
        self.order_id = order_id
        super().__init__(f"Cannot {action} an order that is {status}")


class PersistenceError(OrderError):
    pass
