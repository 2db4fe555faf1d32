import uuid

from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from app.data.database import Base


class OrderItemModel(Base):
    __tablename__ = "order_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    # kopia z koszyka w momencie checkoutu, nigdy nie czytane ponownie z katalogu
    sku = Column(String(100), nullable=False)
    title = Column(String(255), nullable=False)
    unit_price = Column(Integer, nullable=False)
    currency = Column(String(3), nullable=False)
    qty = Column(Integer, nullable=False)
    line_total = Column(Integer, nullable=False)

    order = relationship("OrderModel", back_populates="items")
