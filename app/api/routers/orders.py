# app/api/routers/orders.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.schemas import OrderCreate, OrderOut, OrderPage, OrderStatusIn
from app.services.order_service import OrderService
from app.services.promo_lookup import SqlPromoLookup
from app.utils.settings import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT

router = APIRouter(prefix="/api/orders", tags=["orders"])


def get_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db, promos=SqlPromoLookup(db))


@router.post("", response_model=OrderOut, status_code=201)
def create_order(payload: OrderCreate, svc: OrderService = Depends(get_service)):
    """
    Checkout koszyka. Powtorne wywolanie dla tego samego koszyka
    zwraca to samo zamowienie.
    """
    return svc.create_order(payload.cart_id)


@router.get("", response_model=OrderPage)
def list_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    svc: OrderService = Depends(get_service),
):
    return svc.get_orders(page, limit)


@router.get("/by-cart/{cart_id}", response_model=OrderOut)
def get_order_by_cart(cart_id: str, svc: OrderService = Depends(get_service)):
    return svc.get_order_by_cart_id(cart_id)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: str, svc: OrderService = Depends(get_service)):
    return svc.get_order_by_id(order_id)


@router.put("/{order_id}/status", response_model=OrderOut)
def update_order_status(
    order_id: str,
    payload: OrderStatusIn,
    svc: OrderService = Depends(get_service),
):
    return svc.update_order_status(order_id, payload.status)
