# app/repos/product_repo.py
from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session, selectinload

from app.data.models.product import ProductModel
from app.data.models.variant import VariantModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def _filtered(self, stmt, status: str | None, search: str | None):
        if status:
            stmt = stmt.where(ProductModel.status == status)
        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(ProductModel.title).like(pattern),
                    func.lower(ProductModel.description).like(pattern),
                    func.lower(ProductModel.slug).like(pattern),
                )
            )
        return stmt

    def list_products(
        self,
        offset: int,
        limit: int,
        status: str | None = None,
        search: str | None = None,
    ) -> list[ProductModel]:
        stmt = select(ProductModel).options(selectinload(ProductModel.variants))
        stmt = self._filtered(stmt, status, search)
        return list(
            self.db.execute(
                stmt.order_by(ProductModel.created_at.desc(), ProductModel.slug)
                .offset(offset)
                .limit(limit)
            ).scalars().all()
        )

    def count_products(self, status: str | None = None, search: str | None = None) -> int:
        stmt = self._filtered(select(func.count(ProductModel.id)), status, search)
        return self.db.execute(stmt).scalar_one()

    def get_product_by_slug(self, slug: str) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel)
            .options(selectinload(ProductModel.variants))
            .where(ProductModel.slug == slug)
        ).scalar_one_or_none()

    def get_variant_by_sku(self, sku: str) -> VariantModel | None:
        return self.db.execute(
            select(VariantModel)
            .options(selectinload(VariantModel.product))
            .where(VariantModel.sku == sku)
        ).scalar_one_or_none()
