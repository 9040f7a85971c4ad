# storefront/api/context.py
from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session
from strawberry.fastapi import BaseContext

from storefront.api.cookies import get_cart_id
from storefront.data.database import get_db
from storefront.domain.products import Inventory
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService
from storefront.services.payment_gateway import PaymentGateway


class Context(BaseContext):
    """Wszystko czego potrzebuje resolver: sesja, katalog, operator platnosci, id koszyka z cookie."""

    def __init__(
        self,
        db: Session,
        inventory: Inventory,
        gateway: PaymentGateway,
        currency: str,
        origin: str,
        request: Request,
        response: Response,
    ):
        super().__init__()
        self.db = db
        self.inventory = inventory
        self.gateway = gateway
        self._request = request
        self._response = response
        self._cart_id: str | None = None
        self.currency = currency
        self.origin = origin

    @property
    def cart_id(self) -> str:
        # cookie czytane/ustawiane dopiero gdy resolver go potrzebuje
        if self._cart_id is None:
            self._cart_id = get_cart_id(self._request, self._response)
        return self._cart_id

    @property
    def carts(self) -> CartService:
        return CartService(self.db, currency=self.currency)

    @property
    def checkout(self) -> CheckoutService:
        return CheckoutService(
            self.db,
            inventory=self.inventory,
            gateway=self.gateway,
            origin=self.origin,
            currency=self.currency,
        )


def get_context(
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
) -> Context:
    state = request.app.state
    return Context(
        db=db,
        inventory=state.inventory,
        gateway=state.gateway,
        currency=state.currency,
        origin=state.origin,
        request=request,
        response=response,
    )
