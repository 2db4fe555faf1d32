# app/repos/promo_repo.py
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.data.models.promo import PromoModel


class PromoRepo:
    def __init__(self, db: Session):
        self.db = db

    def find_active_by_code(self, code: str, now: datetime) -> PromoModel | None:
        #okno aktywnosci [starts_at, ends_at)
        return self.db.execute(
            select(PromoModel).where(
                PromoModel.code == code,
                PromoModel.active.is_(True),
                PromoModel.starts_at <= now,
                PromoModel.ends_at > now,
            )
        ).scalar_one_or_none()
