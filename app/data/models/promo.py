import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Boolean, Numeric

from app.data.database import Base


class PromoModel(Base):
    __tablename__ = "promos"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    code = Column(String(50), nullable=False, unique=True, index=True)

    type = Column(String(10), nullable=False)  # percent, fixed
    # percent: 0-100 (moze byc ulamkowy), fixed: minor units
    value = Column(Numeric(10, 2), nullable=False)

    starts_at = Column(DateTime(timezone=True), nullable=False)
    ends_at = Column(DateTime(timezone=True), nullable=False)
    active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
