# app/services/product_service.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from app.data.models.product import ProductModel
from app.domain.errors import NotFoundError, ValidationError
from app.repos.product_repo import ProductRepo
from app.utils.settings import MAX_PAGE_LIMIT


def product_snapshot(product: ProductModel) -> Dict[str, Any]:
    return {
        "id": product.id,
        "title": product.title,
        "slug": product.slug,
        "description": product.description,
        "images": list(product.images or []),
        "status": product.status,
        "variants": [
            {
                "sku": v.sku,
                "options": dict(v.options or {}),
                "price": v.price,
                "currency": v.currency,
                "stock": v.stock,
            }
            for v in product.variants
        ],
        "created_at": product.created_at,
    }


class ProductService:
    """Przegladanie katalogu (tylko odczyt)."""

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def list_products(
        self,
        page: int = 1,
        limit: int = 10,
        status: str | None = None,
        search: str | None = None,
    ) -> Dict[str, Any]:
        if page < 1 or limit < 1 or limit > MAX_PAGE_LIMIT:
            raise ValidationError(
                "Invalid pagination",
                details=[{"path": "page/limit", "issue": f"page >= 1, 1 <= limit <= {MAX_PAGE_LIMIT}"}],
            )

        products = self.repo.list_products(
            offset=(page - 1) * limit, limit=limit, status=status, search=search
        )
        total = self.repo.count_products(status=status, search=search)

        return {
            "products": [product_snapshot(p) for p in products],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": (total + limit - 1) // limit,
            },
        }

    def get_product_by_slug(self, slug: str) -> Dict[str, Any]:
        product = self.repo.get_product_by_slug(slug)
        if not product:
            raise NotFoundError("Product not found")
        return product_snapshot(product)
