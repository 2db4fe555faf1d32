import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship

from app.data.database import Base

ORDER_STATUSES = ("created", "paid", "cancelled")


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # unique = jedno zamowienie na koszyk, to jest zabezpieczenie przy rownoleglym checkoucie
    cart_id = Column(String(36), ForeignKey("carts.id"), nullable=False, unique=True)

    promo_code = Column(String(50), nullable=True)
    subtotal = Column(Integer, nullable=False)
    discount = Column(Integer, nullable=False, default=0)
    grand_total = Column(Integer, nullable=False)

    status = Column(String(20), nullable=False, default="created")  # created, paid, cancelled
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.position",
    )
