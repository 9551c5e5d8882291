# storefront/core/errors.py
import uuid


class StorefrontError(Exception):
    """Base class for storefront domain errors."""


class InvalidLineItem(StorefrontError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid line item: {reason}")
        self.reason = reason


class ProductNotFound(StorefrontError):
    def __init__(self, product_id: uuid.UUID | str) -> None:
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class EmptyOrder(StorefrontError):
    def __init__(self) -> None:
        super().__init__("No order items")


class OrderNotFound(StorefrontError):
    def __init__(self, order_id: uuid.UUID) -> None:
        super().__init__("Order not found")
        self.order_id = order_id


class OrderAlreadyPaid(StorefrontError):
    def __init__(self, order_id: uuid.UUID) -> None:
        super().__init__(f"Order {order_id} is already paid")
        self.order_id = order_id


class OrderAlreadyDelivered(StorefrontError):
    def __init__(self, order_id: uuid.UUID) -> None:
        super().__init__(f"Order {order_id} is already delivered")
        self.order_id = order_id


class ProfileConflict(StorefrontError):
    def __init__(self, email: str) -> None:
        super().__init__(f"Email {email} is linked to another account")
        self.email = email
