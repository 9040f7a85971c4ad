# storefront/repos/cart_repo.py
from sqlalchemy import select, update, delete, case
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel


class CartRepo:
    """
    Dostep do koszykow i pozycji.
    Zmiany ilosci to pojedyncze UPDATE liczone przez baze (quantity = quantity + 1),
    nigdy odczyt-modyfikacja-zapis w pythonie, wiec rownolegle klikniecia sie nie gubia
    """

    def __init__(self, db: Session):
        self.db = db

    @property
    def dialect(self) -> str:
        return self.db.get_bind().dialect.name

    def _insert(self, model):
        if self.dialect == "postgresql":
            return postgresql.insert(model)
        if self.dialect == "sqlite":
            return sqlite.insert(model)
        if self.dialect in ("mysql", "mariadb"):
            return mysql.insert(model)
        raise NotImplementedError(f"Upsert is not supported for dialect {self.dialect}")

    #koszyk
    def get_cart(self, cart_id: str) -> CartModel | None:
        return self.db.get(CartModel, cart_id)

    def get_or_create_cart(self, cart_id: str) -> CartModel:
        # INSERT ... ON CONFLICT DO NOTHING, brak wyscigu check-then-insert
        stmt = self._insert(CartModel).values(id=cart_id)
        if self.dialect in ("mysql", "mariadb"):
            stmt = stmt.prefix_with("IGNORE")
        else:
            stmt = stmt.on_conflict_do_nothing(index_elements=[CartModel.id])
        self.db.execute(stmt)
        return self.db.get(CartModel, cart_id)

    #pozycje
    def get_cart_items(self, cart_id: str) -> list[CartItemModel]:
        stmt = (
            select(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
            .order_by(CartItemModel.created_at, CartItemModel.id)
            .execution_options(populate_existing=True)
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_cart_item(self, cart_id: str, item_id: str) -> CartItemModel | None:
        stmt = (
            select(CartItemModel)
            .where(CartItemModel.cart_id == cart_id, CartItemModel.id == item_id)
            .execution_options(populate_existing=True)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def upsert_cart_item(
        self,
        cart_id: str,
        item_id: str,
        name: str,
        price: int,
        quantity: int = 1,
        description: str | None = None,
        image: str | None = None,
    ) -> None:
        # nowa pozycja albo quantity += quantity, cena i opis zostaja z pierwszego dodania
        stmt = self._insert(CartItemModel).values(
            id=item_id,
            cart_id=cart_id,
            name=name,
            description=description,
            price=price,
            quantity=quantity,
            image=image,
        )
        if self.dialect in ("mysql", "mariadb"):
            stmt = stmt.on_duplicate_key_update(
                quantity=CartItemModel.quantity + stmt.inserted.quantity
            )
        else:
            stmt = stmt.on_conflict_do_update(
                index_elements=[CartItemModel.id, CartItemModel.cart_id],
                set_={"quantity": CartItemModel.quantity + stmt.excluded.quantity},
            )
        self.db.execute(stmt)

    def increment_cart_item(self, cart_id: str, item_id: str, by: int = 1) -> int:
        stmt = (
            update(CartItemModel)
            .where(CartItemModel.cart_id == cart_id, CartItemModel.id == item_id)
            .values(quantity=CartItemModel.quantity + by)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount

    def decrement_cart_item(self, cart_id: str, item_id: str, by: int = 1) -> int:
        # clamp na 0 w tym samym UPDATE, wiersz zostaje
        stmt = (
            update(CartItemModel)
            .where(CartItemModel.cart_id == cart_id, CartItemModel.id == item_id)
            .values(
                quantity=case(
                    (CartItemModel.quantity > by, CartItemModel.quantity - by),
                    else_=0,
                )
            )
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount

    def delete_cart_item(self, cart_id: str, item_id: str) -> int:
        stmt = (
            delete(CartItemModel)
            .where(CartItemModel.cart_id == cart_id, CartItemModel.id == item_id)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
