# app/data/seed.py
from datetime import datetime, timezone, timedelta
from decimal import Decimal

from sqlalchemy.orm import Session

from app.data.database import Base, SessionLocal, engine
from app.data.models import ProductModel, VariantModel, PromoModel
from app.utils.logging import get_logger

logger = get_logger(__name__)

IMG = "https://images.unsplash.com/{}?w=500"

DEMO_PRODUCTS = [
    {
        "title": "Premium Wireless Headphones",
        "slug": "premium-wireless-headphones",
        "description": "High-quality wireless headphones with noise cancellation and premium sound quality.",
        "images": [IMG.format("photo-1505740420928-5e560c06d30e")],
        "variants": [
            {"sku": "HP-BLK-001", "options": {"color": "Black", "size": "Standard"}, "price": 29900, "stock": 50},
            {"sku": "HP-WHT-001", "options": {"color": "White", "size": "Standard"}, "price": 29900, "stock": 30},
        ],
    },
    {
        "title": "Smart Fitness Watch",
        "slug": "smart-fitness-watch",
        "description": "Advanced fitness tracking watch with heart rate monitoring and GPS.",
        "images": [IMG.format("photo-1523275335684-37898b6baf30")],
        "variants": [
            {"sku": "FW-BLK-001", "options": {"color": "Black", "size": "42mm"}, "price": 19900, "stock": 25},
            {"sku": "FW-SLV-001", "options": {"color": "Silver", "size": "42mm"}, "price": 19900, "stock": 20},
            {"sku": "FW-BLK-002", "options": {"color": "Black", "size": "46mm"}, "price": 22900, "stock": 15},
        ],
    },
    {
        "title": "Ultra HD 4K Camera",
        "slug": "ultra-hd-4k-camera",
        "description": "Professional 4K camera with advanced autofocus and image stabilization.",
        "images": [IMG.format("photo-1516035069371-29a1b244cc32")],
        "variants": [
            {"sku": "CAM-4K-001", "options": {"color": "Black", "lens": "24-70mm"}, "price": 129900, "stock": 10},
            {"sku": "CAM-4K-002", "options": {"color": "Black", "lens": "70-200mm"}, "price": 149900, "stock": 8},
        ],
    },
    {
        "title": "Ergonomic Office Chair",
        "slug": "ergonomic-office-chair",
        "description": "Comfortable ergonomic office chair with adjustable features and premium materials.",
        "images": [IMG.format("photo-1586023492125-27b2c045efd7")],
        "variants": [
            {"sku": "CHR-BLK-001", "options": {"color": "Black", "material": "Mesh"}, "price": 39900, "stock": 15},
            {"sku": "CHR-GRY-001", "options": {"color": "Gray", "material": "Leather"}, "price": 59900, "stock": 12},
        ],
    },
]


def demo_promos(now: datetime) -> list[dict]:
    # okna liczone od momentu seedowania, EXPIRED jest juz po terminie i wylaczony
    return [
        {"code": "WELCOME10", "type": "percent", "value": Decimal("10.00"),
         "starts_at": now - timedelta(days=1), "ends_at": now + timedelta(days=365), "active": True},
        {"code": "SAVE20", "type": "percent", "value": Decimal("20.00"),
         "starts_at": now - timedelta(days=1), "ends_at": now + timedelta(days=180), "active": True},
        {"code": "FREESHIP", "type": "fixed", "value": Decimal("1500"),
         "starts_at": now - timedelta(days=1), "ends_at": now + timedelta(days=365), "active": True},
        {"code": "FLASH50", "type": "percent", "value": Decimal("50.00"),
         "starts_at": now - timedelta(days=1), "ends_at": now + timedelta(days=30), "active": True},
        {"code": "EXPIRED", "type": "percent", "value": Decimal("25.00"),
         "starts_at": now - timedelta(days=400), "ends_at": now - timedelta(days=35), "active": False},
    ]


def seed_catalog(db: Session, currency: str = "USD", now: datetime | None = None) -> bool:
    """Seeduje produkty i promocje tylko jesli baza jest pusta. Zwraca True gdy cos dodano."""
    if db.query(ProductModel).first():
        return False

    now = now or datetime.now(timezone.utc)

    for data in DEMO_PRODUCTS:
        product = ProductModel(
            title=data["title"],
            slug=data["slug"],
            description=data["description"],
            images=data["images"],
            status="active",
            variants=[VariantModel(currency=currency, **v) for v in data["variants"]],
        )
        db.add(product)

    for promo in demo_promos(now):
        db.add(PromoModel(**promo))

    db.commit()
    logger.info(f"Seeded {len(DEMO_PRODUCTS)} products and {len(demo_promos(now))} promos")
    return True


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_catalog(db)
    finally:
        db.close()


if __name__ == "__main__":
    seed()
