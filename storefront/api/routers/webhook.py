# storefront/api/routers/webhook.py
from fastapi import APIRouter, Depends, Header, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.exceptions import WebhookVerificationError
from storefront.services.fulfillment_service import CHECKOUT_COMPLETED, FulfillmentService, Notifier
from storefront.services.payment_gateway import PaymentGateway
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["checkout"])


def handle_event(
    gateway: PaymentGateway,
    db: Session,
    notifier: Notifier | None,
    payload: bytes,
    signature: str | None,
) -> None:
    """Synchroniczna czesc webhooka: weryfikacja podpisu, zapis zamowienia, kolejka Celery."""
    event = gateway.construct_event(payload, signature)

    if event.type == CHECKOUT_COMPLETED:
        FulfillmentService(db, notifier=notifier).fulfill(event.data)
    else:
        logger.info(f"Ignoring webhook event {event.type}")


@router.post("/webhook", response_class=PlainTextResponse)
async def webhook(
    request: Request,
    stripe_signature: str | None = Header(default=None, alias="Stripe-Signature"),
    db: Session = Depends(get_db),
):
    """
    Callback od operatora platnosci.
    Podpis sprawdzamy na surowym body, przed jakimkolwiek uzyciem payloadu.
    """
    payload = await request.body()
    state = request.app.state

    # baza, stripe i broker sa blokujace, poza petla eventow
    try:
        await run_in_threadpool(handle_event, state.gateway, db, state.notifier, payload, stripe_signature)
    except WebhookVerificationError as e:
        logger.warning(f"Rejected webhook: {e.message}")
        return PlainTextResponse(f"Webhook Error: {e.message}", status_code=400)

    return PlainTextResponse("", status_code=200)
