# storefront/services/fulfillment_service.py
from typing import Any, Callable

from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.repos.order_repo import OrderRepo
from storefront.services.notification_service import NotificationService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"

Notifier = Callable[[str, str, str | None], None]


class FulfillmentService:
    """
    Realizacja zamowienia po webhooku "checkout.session.completed".

    1. Zapisuje zamowienie (id = id sesji, wiec ponowiony webhook nic nie dubluje)
    2. Wysyla powiadomienie do klienta (async), notified=True dopiero po udanej wysylce
    """

    def __init__(self, db: Session, notifier: Notifier | None = None):
        self.repo = OrderRepo(db)
        self.notifier = notifier or NotificationService.send_order_confirmation

    def fulfill(self, session: dict[str, Any]) -> OrderModel | None:
        session_id = session["id"]
        cart_id = (session.get("metadata") or {}).get("cartId")
        if not cart_id:
            logger.warning(f"Checkout session {session_id} has no cartId metadata, skipping fulfillment")
            return None

        customer_email = session.get("customer_email") or (session.get("customer_details") or {}).get("email")

        order = self.repo.get_order(session_id)
        if order is None:
            order = self.repo.create_order(
                OrderModel(
                    id=session_id,
                    cart_id=cart_id,
                    status="FULFILLED",
                    amount_total=session.get("amount_total"),
                    currency=session.get("currency"),
                    customer_email=customer_email,
                )
            )
            # None = rownolegla dostawa zapisala je pierwsza
            order = order or self.repo.get_order(session_id)

        if order.notified:
            logger.info(f"Checkout session {session_id} already fulfilled")
            return order

        logger.info(f"Fulfilling order {order.id} for cart {order.cart_id}")

        # blad (np. broker nie odpowiada) -> webhook 500, operator ponowi dostawe
        self.notifier(order.id, order.cart_id, order.customer_email)
        self.repo.mark_notified(order)
        return order
