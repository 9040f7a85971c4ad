# storefront/repos/order_repo.py
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_order(self, order_id: str) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def get_orders_for_cart(self, cart_id: str) -> list[OrderModel]:
        stmt = select(OrderModel).where(OrderModel.cart_id == cart_id).order_by(OrderModel.created_at)
        return list(self.db.execute(stmt).scalars().all())

    def create_order(self, order: OrderModel) -> OrderModel | None:
        """Zwraca None jesli zamowienie dla tej sesji juz istnieje (ponowiony webhook)."""
        self.db.add(order)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return None
        self.db.refresh(order)
        return order

    def mark_notified(self, order: OrderModel) -> None:
        order.notified = True
        self.db.commit()
