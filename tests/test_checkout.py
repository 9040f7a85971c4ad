import pytest

from storefront.data.models.cart_item import CartItemModel
from storefront.domain.exceptions import (
    EmptyCartError,
    ErrorKind,
    InvalidCartError,
    ItemNotInInventoryError,
)
from storefront.domain.products import Inventory, Product
from storefront.domain.schemas import AddItemIn
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService, validate_cart_items
from storefront.services.payment_gateway import to_stripe_line_item


def _item(item_id="p1", price=1000, quantity=1, **kwargs):
    return CartItemModel(id=item_id, cart_id="c1", name=f"Item {item_id}", price=price, quantity=quantity, **kwargs)


class TestValidateCartItems:
    def test_uses_inventory_price_not_cart_price(self):
        inventory = Inventory([Product(id="p1", slug="p1", title="P1", price=5000)])

        line_items = validate_cart_items(inventory, [_item(price=9999, quantity=2)], "USD")

        assert len(line_items) == 1
        assert line_items[0].unit_amount == 5000
        assert line_items[0].quantity == 2
        assert line_items[0].currency == "USD"

    def test_display_fields_come_from_cart_item(self, inventory):
        item = _item(description="Soft cotton", image="https://img.test/cart.jpg")

        line = validate_cart_items(inventory, [item], "USD")[0]

        assert line.name == "Item p1"
        assert line.description == "Soft cotton"
        assert line.image == "https://img.test/cart.jpg"

    def test_unknown_item_is_rejected_even_with_matching_price(self, inventory):
        with pytest.raises(ItemNotInInventoryError) as exc:
            validate_cart_items(inventory, [_item(), _item("ghost", price=1000)], "USD")

        assert exc.value.message == "Item with id ghost is not on the inventory"
        assert exc.value.kind is ErrorKind.NOT_IN_INVENTORY

    def test_empty_list_is_rejected(self, inventory):
        with pytest.raises(EmptyCartError) as exc:
            validate_cart_items(inventory, [], "USD")
        assert exc.value.message == "Cart is empty"

    def test_stripe_line_item_shape(self, inventory):
        line = validate_cart_items(inventory, [_item("p1", image="https://img.test/a.jpg")], "USD")[0]

        assert to_stripe_line_item(line) == {
            "quantity": 1,
            "price_data": {
                "currency": "usd",
                "unit_amount": 1000,
                "product_data": {"name": "Item p1", "images": ["https://img.test/a.jpg"]},
            },
        }


class TestCreateCheckoutSession:
    @pytest.fixture
    def checkout(self, session, inventory, gateway):
        return CheckoutService(session, inventory=inventory, gateway=gateway, origin="http://shop.test", currency="USD")

    @pytest.fixture
    def carts(self, session):
        return CartService(session, currency="USD")

    def test_unknown_cart(self, checkout, gateway):
        with pytest.raises(InvalidCartError) as exc:
            checkout.create_checkout_session("nope")

        assert exc.value.message == "Invalid cart"
        assert gateway.calls == []

    def test_empty_cart(self, checkout, carts):
        carts.get_cart("c1")

        with pytest.raises(EmptyCartError) as exc:
            checkout.create_checkout_session("c1")
        assert exc.value.message == "Cart is empty"

    def test_cart_with_only_zero_quantities_is_empty(self, checkout, carts):
        carts.add_item(AddItemIn(cart_id="c1", id="p1", name="Shirt", price=1000))
        carts.decrease_item("c1", "p1")

        with pytest.raises(EmptyCartError):
            checkout.create_checkout_session("c1")

    def test_creates_session(self, checkout, carts, gateway):
        carts.add_item(AddItemIn(cart_id="c1", id="p1", name="Shirt", price=1000, quantity=2))
        carts.add_item(AddItemIn(cart_id="c1", id="p2", name="Hat", price=1, quantity=1))
        carts.add_item(AddItemIn(cart_id="c1", id="p3", name="Scarf", price=2500))
        carts.decrease_item("c1", "p3")

        result = checkout.create_checkout_session("c1")

        assert result.id.startswith("cs_test_")
        assert result.url.endswith(result.id)

        call = gateway.calls[-1]
        assert call["metadata"] == {"cartId": "c1"}
        assert call["success_url"] == "http://shop.test/thankyou?session_id={CHECKOUT_SESSION_ID}"
        assert call["cancel_url"] == "http://shop.test/cart?cancelled=true"
        assert [(li.name, li.unit_amount, li.quantity) for li in call["line_items"]] == [
            ("Shirt", 1000, 2),
            ("Hat", 5000, 1),
        ]

    def test_tampered_item_blocks_checkout(self, checkout, carts, gateway):
        carts.add_item(AddItemIn(cart_id="c1", id="not-for-sale", name="Free stuff", price=0))

        with pytest.raises(ItemNotInInventoryError):
            checkout.create_checkout_session("c1")
        assert gateway.calls == []

    def test_retrieve_session(self, checkout, carts):
        carts.add_item(AddItemIn(cart_id="c1", id="p2", name="Hat", price=5000, quantity=2))
        created = checkout.create_checkout_session("c1")

        details = checkout.retrieve_checkout_session(created.id)

        assert details.id == created.id
        assert details.cart_id == "c1"
        assert details.status == "open"
        assert details.amount_total == 10000
