# storefront/domain/aggregation.py
from typing import Iterable

from storefront.data.models.cart_item import CartItemModel
from storefront.domain.money import Money
from storefront.domain.schemas import CartItemOut, CartOut, MoneyOut
from storefront.utils.settings import CURRENCY_CODE


def _money_out(money: Money) -> MoneyOut:
    return MoneyOut(amount=money.amount, formatted=money.formatted)


def total_items(items: Iterable[CartItemModel]) -> int:
    return sum(i.quantity for i in items)


def sub_total(items: Iterable[CartItemModel], currency: str = CURRENCY_CODE) -> Money:
    return Money(sum(i.price * i.quantity for i in items), currency)


def build_cart(cart_id: str, items: list[CartItemModel], currency: str = CURRENCY_CODE) -> CartOut:
    """
    Liczone przy kazdym odczycie, nic nie jest cache'owane,
    wiec sumy zawsze zgadzaja sie z wierszami w bazie
    """
    return CartOut(
        id=cart_id,
        total_items=total_items(items),
        items=[
            CartItemOut(
                id=i.id,
                name=i.name,
                description=i.description,
                image=i.image,
                quantity=i.quantity,
                unit_total=_money_out(Money(i.price, currency)),
                line_total=_money_out(Money(i.price, currency).multiply(i.quantity)),
            )
            for i in items
        ],
        sub_total=_money_out(sub_total(items, currency)),
    )
