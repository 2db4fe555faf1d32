import uuid

from sqlalchemy import Column, Integer, String, ForeignKey, JSON
from sqlalchemy.orm import relationship

from app.data.database import Base


class VariantModel(Base):
    __tablename__ = "variants"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)

    sku = Column(String(100), nullable=False, unique=True, index=True)
    options = Column(JSON, nullable=False, default=dict)
    price = Column(Integer, nullable=False)  # minor units (grosze/centy)
    currency = Column(String(3), nullable=False)
    stock = Column(Integer, nullable=False, default=0)

    product = relationship("ProductModel", back_populates="variants")
