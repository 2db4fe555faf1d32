#app/api/routers/carts.py
from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.schemas import CartOut, ItemIn, ItemUpdateIn, PromoIn
from app.services.cart_service import CartService
from app.services.catalog import build_catalog
from app.services.promo_lookup import SqlPromoLookup
from app.utils.settings import CART_TOKEN_HEADER, CART_COOKIE_NAME, CART_COOKIE_MAX_AGE

router = APIRouter(prefix="/api/carts", tags=["carts"])


def get_service(db: Session = Depends(get_db)) -> CartService:
    return CartService(
        db=db,
        catalog=build_catalog(db),
        promos=SqlPromoLookup(db),
    )


def cart_token(
    request: Request,
    response: Response,
    svc: CartService = Depends(get_service),
) -> str:
    """Token z naglowka albo cookie, brak lub nieznany token = nowy koszyk."""
    incoming = request.headers.get(CART_TOKEN_HEADER) or request.cookies.get(CART_COOKIE_NAME)
    token = svc.ensure_cart(incoming)

    if token != incoming:
        response.set_cookie(
            CART_COOKIE_NAME,
            token,
            max_age=CART_COOKIE_MAX_AGE,
            httponly=True,
            samesite="strict",
        )
    response.headers[CART_TOKEN_HEADER] = token
    request.state.cart_token = token
    return token


@router.get("", response_model=CartOut)
def get_cart(token: str = Depends(cart_token), svc: CartService = Depends(get_service)):
    return svc.get_cart(token)


@router.post("/items", response_model=CartOut)
def add_item(
    payload: ItemIn,
    token: str = Depends(cart_token),
    svc: CartService = Depends(get_service),
):
    return svc.add_item(token, payload.sku, payload.qty)


@router.put("/items/{sku}", response_model=CartOut)
def update_item(
    sku: str,
    payload: ItemUpdateIn,
    token: str = Depends(cart_token),
    svc: CartService = Depends(get_service),
):
    return svc.update_item(token, sku, payload.qty)


@router.delete("/items/{sku}", response_model=CartOut)
def remove_item(
    sku: str,
    token: str = Depends(cart_token),
    svc: CartService = Depends(get_service),
):
    return svc.remove_item(token, sku)


@router.post("/apply-promo", response_model=CartOut)
def apply_promo(
    payload: PromoIn,
    token: str = Depends(cart_token),
    svc: CartService = Depends(get_service),
):
    return svc.apply_promo(token, payload.code)


@router.delete("/promo", response_model=CartOut)
def remove_promo(token: str = Depends(cart_token), svc: CartService = Depends(get_service)):
    return svc.remove_promo(token)
