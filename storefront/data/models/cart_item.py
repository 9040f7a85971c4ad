from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, Text, DateTime, CheckConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    # ten sam produkt moze byc w wielu koszykach, unikalnosc per koszyk
    id = Column(String(64), primary_key=True)
    cart_id = Column(String(64), ForeignKey("carts.id", ondelete="CASCADE"), primary_key=True)

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    # cena w groszach/centach, zapisana przy pierwszym dodaniu
    price = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False, default=1, server_default="1")
    image = Column(String(1024), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    cart = relationship("CartModel", back_populates="items")

    __table_args__ = (CheckConstraint("quantity >= 0", name="ck_cart_item_quantity"),)
