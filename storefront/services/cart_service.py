from sqlalchemy.orm import Session

from storefront.domain.aggregation import build_cart
from storefront.domain.exceptions import CartItemNotFoundError
from storefront.domain.schemas import AddItemIn, CartOut
from storefront.repos.cart_repo import CartRepo
from storefront.utils.settings import CURRENCY_CODE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

class CartService:
    """
    Use case'y dla domeny cart
    query (get) - find-or-create + agregacja
    commands (add, increase, decrease, remove) - jedna zmiana pozycji i zwrot przeliczonego koszyka
    """

    def __init__(self, db: Session, currency: str = CURRENCY_CODE):
        self.repo = CartRepo(db)
        self.currency = currency

    #query - odczyt
    def get_cart(self, cart_id: str) -> CartOut:
        self.repo.get_or_create_cart(cart_id)
        self.repo.commit()
        return self._view(cart_id)

    def _view(self, cart_id: str) -> CartOut:
        items = self.repo.get_cart_items(cart_id)
        return build_cart(cart_id, items, self.currency)

    #commands
    def add_item(self, payload: AddItemIn) -> CartOut:
        try:
            self.repo.get_or_create_cart(payload.cart_id)
            self.repo.upsert_cart_item(
                cart_id=payload.cart_id,
                item_id=payload.id,
                name=payload.name,
                price=payload.price,
                quantity=payload.quantity,
                description=payload.description,
                image=payload.image,
            )
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Added {payload.quantity} x {payload.id} to cart {payload.cart_id}")
        return self._view(payload.cart_id)

    def increase_item(self, cart_id: str, item_id: str) -> CartOut:
        rowcount = self.repo.increment_cart_item(cart_id, item_id)
        if rowcount == 0:
            self.repo.rollback()
            raise CartItemNotFoundError(cart_id, item_id)
        self.repo.commit()

        logger.info(f"Increased {item_id} in cart {cart_id}")
        return self._view(cart_id)

    def decrease_item(self, cart_id: str, item_id: str) -> CartOut:
        # ponizej zera nie schodzimy, pozycja zostaje z quantity 0
        rowcount = self.repo.decrement_cart_item(cart_id, item_id)
        if rowcount == 0:
            self.repo.rollback()
            raise CartItemNotFoundError(cart_id, item_id)
        self.repo.commit()

        logger.info(f"Decreased {item_id} in cart {cart_id}")
        return self._view(cart_id)

    def remove_item(self, cart_id: str, item_id: str) -> CartOut:
        rowcount = self.repo.delete_cart_item(cart_id, item_id)
        if rowcount == 0:
            self.repo.rollback()
            raise CartItemNotFoundError(cart_id, item_id)
        self.repo.commit()

        logger.info(f"Removed {item_id} from cart {cart_id}")
        return self._view(cart_id)
