# app/tasks/retention.py
from datetime import datetime, timezone, timedelta

from sqlalchemy.orm import Session

from app.celery_worker import celery_app
from app.data.database import SessionLocal
from app.repos.cart_repo import CartRepo
from app.utils.settings import CART_RETENTION_DAYS
from app.utils.logging import get_logger

logger = get_logger(__name__)


def purge_abandoned_carts(db: Session, now: datetime | None = None, days: int = CART_RETENTION_DAYS) -> int:
    """
    Usuwa koszyki bez aktywnosci od `days` dni.
    Koszyki po checkoucie zostaja, bo zamowienie wskazuje na nie przez cart_id.
    """
    now = now or datetime.now(timezone.utc)
    repo = CartRepo(db)

    carts = repo.list_stale_carts(now - timedelta(days=days))
    logger.info(f"Found {len(carts)} abandoned carts to purge")

    for cart in carts:
        repo.delete_cart(cart)
    repo.commit()

    return len(carts)


@celery_app.task(name="app.tasks.retention.purge_abandoned_carts_task")
def purge_abandoned_carts_task():
    logger.info("Purge abandoned carts task started")

    db = SessionLocal()
    try:
        return purge_abandoned_carts(db)
    finally:
        db.close()
