import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.domain import money
from app.domain.errors import ConflictError, NotFoundError, ValidationError
from app.domain.lookups import CatalogLookup, PromoLookup
from app.domain.pricing import price
from app.repos.cart_repo import CartRepo
from app.utils.logging import get_logger, mask_token

logger = get_logger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CartService:
    """
    Agregat koszyka goscia.
    commands (add, update, remove, apply/remove promo) modyfikuja stan
    i zwracaja swiezo przeliczony snapshot, query (get) tylko odczyt

    Stan magazynu to odczyt punktowy, nie rezerwacja: dwa rownolegle
    dodania tego samego SKU moga oba przejsc sprawdzenie.
    """

    def __init__(
        self,
        db: Session,
        catalog: CatalogLookup,
        promos: PromoLookup,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repo = CartRepo(db)
        self.catalog = catalog
        self.promos = promos
        self.clock = clock

    # snapshot z sumami, promo rozwiazywany na zywo tylko do wyswietlenia
    def _snapshot(self, cart: CartModel) -> Dict[str, Any]:
        items = self.repo.get_cart_items(cart.id)

        promo = None
        if cart.promo_code:
            promo = self.promos.find_active_by_code(cart.promo_code, self.clock())

        totals = price(items, promo)

        return {
            "id": cart.id,
            "token": cart.token,
            "promo_code": cart.promo_code,
            "items": [
                {
                    "sku": i.sku,
                    "title": i.title,
                    "unit_price": i.unit_price,
                    "currency": i.currency,
                    "qty": i.qty,
                    "line_total": money.line_total(i.unit_price, i.qty),
                }
                for i in items
            ],
            **totals.model_dump(),
            "created_at": cart.created_at,
            "updated_at": cart.updated_at,
        }

    def _require_cart(self, token: str) -> CartModel:
        cart = self.repo.get_cart_by_token(token)
        if not cart:
            raise NotFoundError("Cart not found")
        return cart

    def _require_item(self, cart: CartModel, sku: str) -> CartItemModel:
        item = self.repo.get_cart_item(cart.id, sku)
        if not item:
            raise NotFoundError("Item not found in cart")
        return item

    def _create_cart(self, token: str) -> CartModel:
        try:
            created = self.repo.create_cart(CartModel(token=token))
        except IntegrityError:
            #ktos inny utworzyl koszyk z tym tokenem w miedzyczasie
            self.repo.rollback()
            created = self.repo.get_cart_by_token(token)
            if not created:
                raise
        logger.info(f"Created cart {created.id} for token {mask_token(token)}")
        return created

    def _save_item(self, cart: CartModel, item: CartItemModel) -> None:
        try:
            self.repo.upsert_cart_item(cart, item)
        except IntegrityError:
            self.repo.rollback()
            raise ConflictError("Cart was modified concurrently, please retry")

    #query - odczyt
    def get_cart(self, token: str) -> Dict[str, Any]:
        return self._snapshot(self._require_cart(token))

    #commands
    def ensure_cart(self, token: str | None) -> str:
        """Zwraca token istniejacego koszyka albo tworzy nowy koszyk z nowym tokenem."""
        if token and self.repo.get_cart_by_token(token):
            return token

        return self._create_cart(str(uuid.uuid4())).token

    def add_item(self, token: str, sku: str, qty: int) -> Dict[str, Any]:
        # Walidacje
        if qty <= 0:
            raise ValidationError(
                "Quantity must be at least 1",
                details=[{"path": "qty", "issue": "must be a positive integer"}],
            )

        entry = self.catalog.find_by_sku(sku)
        if not entry:
            raise NotFoundError("Product variant not found")

        if entry.stock < qty:
            raise ConflictError("Insufficient stock")

        cart = self.repo.get_cart_by_token(token)
        if not cart:
            cart = self._create_cart(token)

        existing_item = self.repo.get_cart_item(cart.id, sku)

        if existing_item:
            #stan sprawdzany na sumie, nie na samej roznicy
            new_qty = existing_item.qty + qty
            if entry.stock < new_qty:
                raise ConflictError("Insufficient stock")

            logger.info(
                f"SKU {sku} already in cart {cart.id}, qty {existing_item.qty} -> {new_qty}"
            )
            existing_item.qty = new_qty
            self._save_item(cart, existing_item)
        else:
            logger.info(f"Adding {qty} x {sku} to cart {cart.id}")
            self._save_item(
                cart,
                CartItemModel(
                    cart_id=cart.id,
                    sku=entry.sku,
                    title=entry.title,
                    unit_price=entry.unit_price,
                    currency=entry.currency,
                    qty=qty,
                ),
            )

        return self._snapshot(cart)

    def update_item(self, token: str, sku: str, qty: int) -> Dict[str, Any]:
        if qty < 0:
            raise ValidationError(
                "Quantity cannot be negative",
                details=[{"path": "qty", "issue": "must be zero or a positive integer"}],
            )

        cart = self._require_cart(token)
        item = self._require_item(cart, sku)

        if qty == 0:
            logger.info(f"Quantity 0 for {sku}, removing it from cart {cart.id}")
            self.repo.delete_cart_item(cart, item)
            return self._snapshot(cart)

        # absolutna nowa ilosc vs aktualny stan
        entry = self.catalog.find_by_sku(sku)
        if not entry or entry.stock < qty:
            raise ConflictError("Insufficient stock")

        item.qty = qty
        self._save_item(cart, item)

        logger.info(f"SKU {sku} in cart {cart.id} set to qty {qty}")
        return self._snapshot(cart)

    def remove_item(self, token: str, sku: str) -> Dict[str, Any]:
        cart = self._require_cart(token)
        item = self._require_item(cart, sku)

        self.repo.delete_cart_item(cart, item)

        logger.info(f"SKU {sku} removed from cart {cart.id}")
        return self._snapshot(cart)

    def apply_promo(self, token: str, code: str) -> Dict[str, Any]:
        # wygasly i nieistniejacy kod sa nierozroznialne dla klienta
        promo = self.promos.find_active_by_code(code, self.clock())
        if not promo:
            raise NotFoundError("Invalid or expired promo code")

        cart = self._require_cart(token)

        if not self.repo.get_cart_items(cart.id):
            raise ConflictError("Cannot apply promo to empty cart")

        # nadpisuje poprzedni kod bez bledu
        cart.promo_code = promo.code
        self.repo.save_cart(cart)

        logger.info(f"Promo {promo.code} applied to cart {cart.id}")
        return self._snapshot(cart)

    def remove_promo(self, token: str) -> Dict[str, Any]:
        cart = self._require_cart(token)

        cart.promo_code = None
        self.repo.save_cart(cart)

        logger.info(f"Promo removed from cart {cart.id}")
        return self._snapshot(cart)
