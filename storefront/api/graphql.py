# storefront/api/graphql.py
from typing import List, Optional

import strawberry
from graphql import GraphQLError
from pydantic import BaseModel, ValidationError
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info

from storefront.api.context import Context, get_context
from storefront.domain.exceptions import CartError, InvalidInputError
from storefront.domain.money import format_money
from storefront.domain.schemas import (
    AddItemIn,
    CartIdIn,
    CartItemKeyIn,
    CartOut,
    CreateCheckoutSessionIn,
    MoneyOut,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


#typy
@strawberry.type
class Money:
    amount: int
    formatted: str

    @classmethod
    def from_out(cls, money: MoneyOut) -> "Money":
        return cls(amount=money.amount, formatted=money.formatted)


@strawberry.type
class CartItem:
    id: strawberry.ID
    name: str
    description: Optional[str]
    image: Optional[str]
    quantity: int
    unit_total: Money
    line_total: Money


@strawberry.type
class Cart:
    id: strawberry.ID
    total_items: int
    items: List[CartItem]
    sub_total: Money

    @classmethod
    def from_out(cls, cart: CartOut) -> "Cart":
        return cls(
            id=strawberry.ID(cart.id),
            total_items=cart.total_items,
            items=[
                CartItem(
                    id=strawberry.ID(i.id),
                    name=i.name,
                    description=i.description,
                    image=i.image,
                    quantity=i.quantity,
                    unit_total=Money.from_out(i.unit_total),
                    line_total=Money.from_out(i.line_total),
                )
                for i in cart.items
            ],
            sub_total=Money.from_out(cart.sub_total),
        )


@strawberry.type
class Product:
    id: strawberry.ID
    slug: str
    title: str
    price: Money
    src: Optional[str]
    body: Optional[str]


@strawberry.type
class CheckoutSession:
    id: strawberry.ID
    url: Optional[str]


@strawberry.type
class CheckoutSessionDetails:
    id: strawberry.ID
    cart_id: Optional[strawberry.ID]
    status: Optional[str]
    payment_status: Optional[str]
    amount_total: Optional[Money]
    customer_email: Optional[str]


#inputy
@strawberry.input
class AddToCartInput:
    cart_id: strawberry.ID
    id: strawberry.ID
    name: str
    price: int
    description: Optional[str] = None
    image: Optional[str] = None
    quantity: Optional[int] = 1


@strawberry.input
class IncreaseCartItemInput:
    id: strawberry.ID
    cart_id: strawberry.ID


@strawberry.input
class DecreaseCartItemInput:
    id: strawberry.ID
    cart_id: strawberry.ID


@strawberry.input
class RemoveFromCartInput:
    id: strawberry.ID
    cart_id: strawberry.ID


@strawberry.input
class CreateCheckoutSessionInput:
    cart_id: strawberry.ID


def _parse(model: type[BaseModel], **data) -> BaseModel:
    try:
        return model(**{k: v for k, v in data.items() if v is not None})
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        raise InvalidInputError(error["msg"], field=field or None) from e


def _graphql_error(error: CartError) -> GraphQLError:
    # komunikat bez zmian, klient porownuje tekst
    return GraphQLError(error.message, extensions={"code": error.kind.value})


def _product(p, currency: str) -> Product:
    return Product(
        id=strawberry.ID(p.id),
        slug=p.slug,
        title=p.title,
        price=Money(amount=p.price, formatted=format_money(p.price, currency)),
        src=p.src,
        body=p.body,
    )


@strawberry.type
class Query:
    @strawberry.field(description="Find-or-create: unknown ids create an empty cart.")
    def cart(self, info: Info[Context, None], id: Optional[strawberry.ID] = None) -> Cart:
        ctx = info.context
        try:
            # cookie tylko gdy klient nie podal id
            payload = _parse(CartIdIn, cart_id=id or ctx.cart_id)
            return Cart.from_out(ctx.carts.get_cart(payload.cart_id))
        except CartError as e:
            raise _graphql_error(e) from e

    @strawberry.field
    def products(self, info: Info[Context, None]) -> List[Product]:
        ctx = info.context
        return [_product(p, ctx.currency) for p in ctx.inventory.all()]

    @strawberry.field
    def product(self, info: Info[Context, None], slug: str) -> Optional[Product]:
        ctx = info.context
        p = ctx.inventory.find_by_slug(slug)
        return _product(p, ctx.currency) if p else None

    @strawberry.field
    def checkout_session(self, info: Info[Context, None], id: strawberry.ID) -> CheckoutSessionDetails:
        ctx = info.context
        session = ctx.checkout.retrieve_checkout_session(id)
        return CheckoutSessionDetails(
            id=strawberry.ID(session.id),
            cart_id=strawberry.ID(session.cart_id) if session.cart_id else None,
            status=session.status,
            payment_status=session.payment_status,
            amount_total=(
                Money(amount=session.amount_total, formatted=format_money(session.amount_total, ctx.currency))
                if session.amount_total is not None
                else None
            ),
            customer_email=session.customer_email,
        )


@strawberry.type
class Mutation:
    @strawberry.mutation
    def add_item(self, info: Info[Context, None], input: AddToCartInput) -> Cart:
        try:
            payload = _parse(
                AddItemIn,
                cart_id=input.cart_id,
                id=input.id,
                name=input.name,
                description=input.description,
                image=input.image,
                price=input.price,
                quantity=input.quantity,
            )
            return Cart.from_out(info.context.carts.add_item(payload))
        except CartError as e:
            raise _graphql_error(e) from e

    @strawberry.mutation
    def increase_cart_item(self, info: Info[Context, None], input: IncreaseCartItemInput) -> Cart:
        try:
            key = _parse(CartItemKeyIn, cart_id=input.cart_id, id=input.id)
            return Cart.from_out(info.context.carts.increase_item(key.cart_id, key.id))
        except CartError as e:
            raise _graphql_error(e) from e

    @strawberry.mutation
    def decrease_cart_item(self, info: Info[Context, None], input: DecreaseCartItemInput) -> Cart:
        try:
            key = _parse(CartItemKeyIn, cart_id=input.cart_id, id=input.id)
            return Cart.from_out(info.context.carts.decrease_item(key.cart_id, key.id))
        except CartError as e:
            raise _graphql_error(e) from e

    @strawberry.mutation
    def remove_item(self, info: Info[Context, None], input: RemoveFromCartInput) -> Cart:
        try:
            key = _parse(CartItemKeyIn, cart_id=input.cart_id, id=input.id)
            return Cart.from_out(info.context.carts.remove_item(key.cart_id, key.id))
        except CartError as e:
            raise _graphql_error(e) from e

    @strawberry.mutation
    def create_checkout_session(self, info: Info[Context, None], input: CreateCheckoutSessionInput) -> CheckoutSession:
        try:
            payload = _parse(CreateCheckoutSessionIn, cart_id=input.cart_id)
            session = info.context.checkout.create_checkout_session(payload.cart_id)
        except CartError as e:
            logger.info(f"Checkout rejected for cart {input.cart_id}: {e.message}")
            raise _graphql_error(e) from e
        return CheckoutSession(id=strawberry.ID(session.id), url=session.url)


schema = strawberry.Schema(query=Query, mutation=Mutation)


def create_graphql_router() -> GraphQLRouter:
    return GraphQLRouter(schema, context_getter=get_context)
