from unittest.mock import patch

import pytest

from storefront.repos.order_repo import OrderRepo
from storefront.services.fulfillment_service import FulfillmentService
from storefront.services.notification_service import (
    NotificationService,
    send_order_confirmation_task,
)


def _session(**overrides):
    data = {
        "id": "cs_test_abc",
        "amount_total": 1500,
        "currency": "usd",
        "customer_email": "buyer@example.com",
        "metadata": {"cartId": "c1"},
    }
    data.update(overrides)
    return data


class TestFulfillmentService:
    def test_creates_order_and_notifies(self, session, notifier):
        order = FulfillmentService(session, notifier=notifier).fulfill(_session())

        assert order.id == "cs_test_abc"
        assert order.cart_id == "c1"
        assert order.status == "FULFILLED"
        assert order.currency == "usd"
        assert notifier.calls == [("cs_test_abc", "c1", "buyer@example.com")]

    def test_email_from_customer_details(self, session, notifier):
        payload = _session(customer_email=None, customer_details={"email": "details@example.com"})

        order = FulfillmentService(session, notifier=notifier).fulfill(payload)

        assert order.customer_email == "details@example.com"

    def test_session_without_cart_is_skipped(self, session, notifier):
        result = FulfillmentService(session, notifier=notifier).fulfill(_session(metadata={}))

        assert result is None
        assert OrderRepo(session).get_order("cs_test_abc") is None
        assert notifier.calls == []

    def test_second_delivery_returns_existing_order(self, session, notifier):
        service = FulfillmentService(session, notifier=notifier)

        first = service.fulfill(_session())
        second = service.fulfill(_session())

        assert second.id == first.id
        assert len(OrderRepo(session).get_orders_for_cart("c1")) == 1
        assert len(notifier.calls) == 1

    def test_notification_failure_is_retried(self, session, notifier):
        def broken(order_id, cart_id, customer_email):
            raise ConnectionError("broker unavailable")

        with pytest.raises(ConnectionError):
            FulfillmentService(session, notifier=broken).fulfill(_session())
        assert OrderRepo(session).get_order("cs_test_abc").notified is False

        order = FulfillmentService(session, notifier=notifier).fulfill(_session())

        assert order.notified is True
        assert notifier.calls == [("cs_test_abc", "c1", "buyer@example.com")]

        FulfillmentService(session, notifier=notifier).fulfill(_session())
        assert len(notifier.calls) == 1


class TestNotifications:
    @patch("storefront.services.notification_service.send_order_confirmation_task.delay")
    def test_default_notifier_enqueues_task(self, mock_delay, session):
        FulfillmentService(session).fulfill(_session())

        mock_delay.assert_called_once_with("cs_test_abc", "c1", "buyer@example.com")

    @patch("storefront.services.notification_service.send_order_confirmation_task.delay")
    def test_send_order_confirmation(self, mock_delay):
        NotificationService.send_order_confirmation("o1", "c1", None)

        mock_delay.assert_called_once_with("o1", "c1", None)

    def test_task_body(self):
        result = send_order_confirmation_task("o1", "c1", None)

        assert result == {"order_id": "o1", "cart_id": "c1", "status": "sent"}
