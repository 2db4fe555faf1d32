# app/services/promo_lookup.py
from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.lookups import ResolvedPromo
from app.repos.promo_repo import PromoRepo


class SqlPromoLookup:
    def __init__(self, db: Session):
        self.repo = PromoRepo(db)

    def find_active_by_code(self, code: str, now: datetime) -> ResolvedPromo | None:
        promo = self.repo.find_active_by_code(code.strip().upper(), now)
        if not promo:
            return None

        return ResolvedPromo(
            code=promo.code,
            type=promo.type,
            value=promo.value,
            starts_at=promo.starts_at,
            ends_at=promo.ends_at,
        )
