# storefront/services/checkout_service.py
from typing import Iterable

from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.domain.exceptions import EmptyCartError, InvalidCartError, ItemNotInInventoryError
from storefront.domain.products import Inventory
from storefront.domain.schemas import CheckoutSessionDetailsOut, CheckoutSessionOut, LineItem
from storefront.repos.cart_repo import CartRepo
from storefront.services.payment_gateway import PaymentGateway
from storefront.utils.settings import APP_ORIGIN, CURRENCY_CODE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def validate_cart_items(
    inventory: Inventory,
    cart_items: Iterable[CartItemModel],
    currency: str = CURRENCY_CODE,
) -> list[LineItem]:
    """
    Sprawdza pozycje koszyka wzgledem katalogu i buduje line items dla operatora platnosci.

    Pozycja jest poprawna jesli:
    - id istnieje w katalogu
    - cena nie zostala podmieniona, dlatego zawsze bierzemy cene z katalogu
    """
    cart_items = list(cart_items)
    if not cart_items:
        raise EmptyCartError()

    line_items = []
    for item in cart_items:
        product = inventory.find(item.id)
        if product is None:
            raise ItemNotInInventoryError(item.id)

        if product.price != item.price:
            logger.warning(
                f"Price mismatch for {item.id} in cart {item.cart_id}: "
                f"cart {item.price}, inventory {product.price}"
            )

        line_items.append(
            LineItem(
                name=item.name,
                description=item.description,
                image=item.image,
                unit_amount=product.price,
                quantity=item.quantity,
                currency=currency,
            )
        )

    return line_items


class CheckoutService:
    """Checkout: koszyk -> walidacja -> sesja u operatora platnosci (pending)."""

    def __init__(
        self,
        db: Session,
        inventory: Inventory,
        gateway: PaymentGateway,
        origin: str = APP_ORIGIN,
        currency: str = CURRENCY_CODE,
    ):
        self.repo = CartRepo(db)
        self.inventory = inventory
        self.gateway = gateway
        self.origin = origin.rstrip("/")
        self.currency = currency

    def create_checkout_session(self, cart_id: str) -> CheckoutSessionOut:
        # tu nie tworzymy koszyka, nieznane id to blad klienta
        cart = self.repo.get_cart(cart_id)
        if not cart:
            raise InvalidCartError(cart_id)

        # pozycje z quantity 0 zostaja w koszyku ale nie ida do platnosci
        items = [i for i in self.repo.get_cart_items(cart_id) if i.quantity > 0]
        if not items:
            raise EmptyCartError()

        line_items = validate_cart_items(self.inventory, items, self.currency)

        session = self.gateway.create_checkout_session(
            line_items=line_items,
            success_url=f"{self.origin}/thankyou?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{self.origin}/cart?cancelled=true",
            metadata={"cartId": cart_id},
        )

        logger.info(f"Created checkout session {session.id} for cart {cart_id} ({len(line_items)} line items)")

        return CheckoutSessionOut(id=session.id, url=session.url)

    def retrieve_checkout_session(self, session_id: str) -> CheckoutSessionDetailsOut:
        session = self.gateway.retrieve_checkout_session(session_id)
        return CheckoutSessionDetailsOut(
            id=session.id,
            cart_id=session.metadata.get("cartId"),
            status=session.status,
            payment_status=session.payment_status,
            amount_total=session.amount_total,
            customer_email=session.customer_email,
        )
