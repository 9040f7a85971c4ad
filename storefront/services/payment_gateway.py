# storefront/services/payment_gateway.py
# checkout rozmawia tylko z PaymentGateway:
# - StripeGateway: stripe SDK (hostowane Checkout Sessions + podpisane webhooki)
# - FakeGateway: w pamieci, do developmentu i testow

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

import stripe

from storefront.domain.exceptions import WebhookVerificationError
from storefront.domain.schemas import LineItem


@dataclass(frozen=True)
class ProviderSession:
    """Sesja checkoutu tak jak ja widzi operator platnosci."""

    id: str
    url: str | None = None
    status: str | None = None
    payment_status: str | None = None
    amount_total: int | None = None
    currency: str | None = None
    customer_email: str | None = None
    metadata: dict = field(default_factory=dict)


@dataclass(frozen=True)
class WebhookEvent:
    id: str
    type: str
    data: dict[str, Any]


class PaymentGateway(ABC):
    @abstractmethod
    def create_checkout_session(
        self,
        line_items: list[LineItem],
        success_url: str,
        cancel_url: str,
        metadata: dict[str, str],
    ) -> ProviderSession:
        """Tworzy hostowana sesje checkoutu."""

    @abstractmethod
    def retrieve_checkout_session(self, session_id: str) -> ProviderSession:
        """Odczyt sesji od operatora."""

    @abstractmethod
    def construct_event(self, payload: bytes, signature: str | None) -> WebhookEvent:
        """
        Weryfikuje podpis webhooka i zwraca event.
        WebhookVerificationError gdy payloadowi nie mozna ufac
        """


def to_stripe_line_item(item: LineItem) -> dict:
    product_data: dict[str, Any] = {
        "name": item.name,
        "images": [item.image] if item.image else [],
    }
    if item.description:
        product_data["description"] = item.description
    return {
        "quantity": item.quantity,
        "price_data": {
            "currency": item.currency.lower(),
            "unit_amount": item.unit_amount,
            "product_data": product_data,
        },
    }


def _session_from_stripe(session: dict[str, Any]) -> ProviderSession:
    # session to zwykly dict (StripeObject.to_dict()), obiekty SDK nie sa slownikami
    customer_details = session.get("customer_details") or {}
    return ProviderSession(
        id=session["id"],
        url=session.get("url"),
        status=session.get("status"),
        payment_status=session.get("payment_status"),
        amount_total=session.get("amount_total"),
        currency=session.get("currency"),
        customer_email=session.get("customer_email") or customer_details.get("email"),
        metadata=dict(session.get("metadata") or {}),
    )


class StripeGateway(PaymentGateway):
    """Adapter Stripe Checkout."""

    def __init__(self, api_key: str, webhook_secret: str) -> None:
        self.api_key = api_key
        self.webhook_secret = webhook_secret

    def create_checkout_session(self, line_items, success_url, cancel_url, metadata):
        session = stripe.checkout.Session.create(
            api_key=self.api_key,
            mode="payment",
            payment_method_types=["card"],
            line_items=[to_stripe_line_item(item) for item in line_items],
            success_url=success_url,
            cancel_url=cancel_url,
            metadata=metadata,
        )
        return _session_from_stripe(session.to_dict())

    def retrieve_checkout_session(self, session_id):
        session = stripe.checkout.Session.retrieve(session_id, api_key=self.api_key)
        return _session_from_stripe(session.to_dict())

    def construct_event(self, payload, signature):
        if not signature:
            raise WebhookVerificationError("Missing stripe signature")
        try:
            event = stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        except ValueError as e:
            raise WebhookVerificationError(f"Invalid payload: {e}") from e
        except stripe.SignatureVerificationError as e:
            raise WebhookVerificationError(str(e)) from e

        data = event.to_dict()
        return WebhookEvent(
            id=data["id"],
            type=data["type"],
            data=data["data"]["object"],
        )


class FakeGateway(PaymentGateway):
    """Sesje w slowniku, podpis to staly token."""

    SIGNATURE = "test-signature"

    def __init__(self, base_url: str = "https://checkout.example.test") -> None:
        self.base_url = base_url.rstrip("/")
        self.sessions: dict[str, ProviderSession] = {}
        self.calls: list[dict] = []

    def create_checkout_session(self, line_items, success_url, cancel_url, metadata):
        self.calls.append(
            {
                "method": "create_checkout_session",
                "line_items": list(line_items),
                "success_url": success_url,
                "cancel_url": cancel_url,
                "metadata": dict(metadata),
            }
        )
        session_id = f"cs_test_{uuid4().hex[:24]}"
        session = ProviderSession(
            id=session_id,
            url=f"{self.base_url}/pay/{session_id}",
            status="open",
            payment_status="unpaid",
            amount_total=sum(i.unit_amount * i.quantity for i in line_items),
            currency=line_items[0].currency.lower() if line_items else None,
            metadata=dict(metadata),
        )
        self.sessions[session_id] = session
        return session

    def retrieve_checkout_session(self, session_id):
        self.calls.append({"method": "retrieve_checkout_session", "session_id": session_id})
        try:
            return self.sessions[session_id]
        except KeyError:
            raise LookupError(f"No such checkout.session: {session_id}") from None

    def construct_event(self, payload, signature):
        if not signature:
            raise WebhookVerificationError("Missing stripe signature")
        if signature != self.SIGNATURE:
            raise WebhookVerificationError("No signatures found matching the expected signature for payload")
        try:
            event = json.loads(payload)
            return WebhookEvent(id=event.get("id", ""), type=event["type"], data=event["data"]["object"])
        except ValueError as e:
            raise WebhookVerificationError(f"Invalid payload: {e}") from e
        except (KeyError, TypeError, AttributeError) as e:
            raise WebhookVerificationError("Invalid payload: missing event type or data") from e
