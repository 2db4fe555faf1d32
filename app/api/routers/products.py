# app/api/routers/products.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.schemas import ProductOut, ProductPage
from app.services.product_service import ProductService
from app.utils.settings import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=ProductPage)
def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    status: str | None = Query(None, pattern="^(active|draft)$"),
    search: str | None = Query(None),
    db: Session = Depends(get_db),
):
    return ProductService(db).list_products(page=page, limit=limit, status=status, search=search)


@router.get("/{slug}", response_model=ProductOut)
def get_product(slug: str, db: Session = Depends(get_db)):
    return ProductService(db).get_product_by_slug(slug)
