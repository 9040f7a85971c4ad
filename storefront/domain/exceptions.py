# storefront/domain/exceptions.py
# komunikaty sa czescia API, frontend porownuje tekst ("Cart is empty", "Invalid cart")
from enum import Enum


class ErrorKind(str, Enum):
    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    INVALID_CART = "INVALID_CART"
    EMPTY_CART = "EMPTY_CART"
    NOT_IN_INVENTORY = "NOT_IN_INVENTORY"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"


class CartError(Exception):
    """Bazowy wyjatek koszyka, kind trafia do extensions.code w GraphQL."""

    kind: ErrorKind = ErrorKind.INVALID_INPUT

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidInputError(CartError):
    kind = ErrorKind.INVALID_INPUT

    def __init__(self, reason: str, field: str | None = None):
        message = f"Invalid input: {field}: {reason}" if field else f"Invalid input: {reason}"
        super().__init__(message)
        self.field = field


class CartItemNotFoundError(CartError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, cart_id: str, item_id: str):
        super().__init__(f"Item with id {item_id} is not in the cart")
        self.cart_id = cart_id
        self.item_id = item_id


class InvalidCartError(CartError):
    """Checkout dla koszyka, ktorego nigdy nie utworzono."""

    kind = ErrorKind.INVALID_CART

    def __init__(self, cart_id: str):
        super().__init__("Invalid cart")
        self.cart_id = cart_id


class EmptyCartError(CartError):
    kind = ErrorKind.EMPTY_CART

    def __init__(self):
        super().__init__("Cart is empty")


class ItemNotInInventoryError(CartError):
    kind = ErrorKind.NOT_IN_INVENTORY

    def __init__(self, item_id: str):
        super().__init__(f"Item with id {item_id} is not on the inventory")
        self.item_id = item_id


class WebhookVerificationError(CartError):
    kind = ErrorKind.INVALID_SIGNATURE
