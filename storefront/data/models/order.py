from sqlalchemy import Boolean, Column, Integer, String, DateTime, false
from datetime import datetime, timezone

from storefront.data.database import Base

class OrderModel(Base):
    __tablename__ = "orders"

    # id sesji checkoutu, webhook moze przyjsc kilka razy
    id = Column(String(255), primary_key=True)
    cart_id = Column(String(64), nullable=False, index=True)

    status = Column(String, nullable=False, default="FULFILLED")
    amount_total = Column(Integer, nullable=True)
    currency = Column(String(3), nullable=True)
    customer_email = Column(String(255), nullable=True)
    # ustawiane dopiero po udanym wyslaniu powiadomienia
    notified = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
