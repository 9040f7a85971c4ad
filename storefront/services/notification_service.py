# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysylania powiadomien.
    Uzywa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_order_confirmation(order_id: str, cart_id: str, customer_email: str | None):
        send_order_confirmation_task.delay(order_id, cart_id, customer_email)


@celery_app.task(name="storefront.services.notification_service.send_order_confirmation_task")
def send_order_confirmation_task(order_id: str, cart_id: str, customer_email: str | None):
    """
    Celery task - w prawdziwym systemie wyslalby email do klienta.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] Order {order_id} for cart {cart_id} confirmed, notifying {customer_email or 'unknown customer'}")

    return {"order_id": order_id, "cart_id": cart_id, "status": "sent"}
