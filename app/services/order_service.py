# app/services/order_service.py
from datetime import datetime
from typing import Any, Callable, Dict

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.order import OrderModel, ORDER_STATUSES
from app.data.models.order_item import OrderItemModel
from app.domain import money
from app.domain.errors import ConflictError, NotFoundError, ValidationError
from app.domain.lookups import PromoLookup
from app.domain.pricing import price
from app.repos.cart_repo import CartRepo
from app.repos.order_repo import OrderRepo
from app.services.cart_service import utcnow
from app.utils.settings import MAX_PAGE_LIMIT
from app.utils.logging import get_logger

logger = get_logger(__name__)


def order_snapshot(order: OrderModel) -> Dict[str, Any]:
    return {
        "id": order.id,
        "cart_id": order.cart_id,
        "promo_code": order.promo_code,
        "items": [
            {
                "sku": i.sku,
                "title": i.title,
                "unit_price": i.unit_price,
                "currency": i.currency,
                "qty": i.qty,
                "line_total": i.line_total,
            }
            for i in order.items
        ],
        "subtotal": order.subtotal,
        "discount": order.discount,
        "grand_total": order.grand_total,
        "status": order.status,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
    }


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien.
    Separacja od CartService, wspolny jest tylko silnik cen (app.domain.pricing).
    """

    def __init__(
        self,
        db: Session,
        promos: PromoLookup,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.promos = promos
        self.clock = clock

    def create_order(self, cart_id: str) -> Dict[str, Any]:
        """
        Use Case: checkout koszyka, idempotentny po cart_id.

        1. Jesli zamowienie dla koszyka juz istnieje - zwraca je bez zmian
        2. Koszyk musi istniec i miec pozycje
        3. Promo z koszyka walidowany na zywo, niewazny daje rabat 0
        4. Zamowienie + pozycje zapisane atomowo
        5. Przegrany wyscig na unique(cart_id) zwraca zamowienie zwyciezcy
        """
        existing = self.repo.get_order_by_cart_id(cart_id)
        if existing:
            logger.info(f"Order {existing.id} already exists for cart {cart_id}, replaying")
            return order_snapshot(existing)

        cart = self.cart_repo.get_cart(cart_id)
        if not cart:
            raise NotFoundError("Cart not found")

        items = self.cart_repo.get_cart_items(cart_id)
        if not items:
            raise ConflictError("Cannot create order from empty cart")

        promo = None
        if cart.promo_code:
            promo = self.promos.find_active_by_code(cart.promo_code, self.clock())
            if promo is None:
                logger.info(
                    f"Promo {cart.promo_code} on cart {cart_id} no longer active, discount 0"
                )

        totals = price(items, promo)

        order = OrderModel(
            cart_id=cart.id,
            promo_code=cart.promo_code,
            subtotal=totals.subtotal,
            discount=totals.discount,
            grand_total=totals.grand_total,
            status="created",
            items=[
                OrderItemModel(
                    position=pos,
                    sku=i.sku,
                    title=i.title,
                    unit_price=i.unit_price,
                    currency=i.currency,
                    qty=i.qty,
                    line_total=money.line_total(i.unit_price, i.qty),
                )
                for pos, i in enumerate(items)
            ],
        )

        try:
            created = self.repo.create_order(order)
        except IntegrityError:
            self.repo.rollback()
            winner = self.repo.get_order_by_cart_id(cart_id)
            if not winner:
                raise
            logger.warning(
                f"Concurrent checkout for cart {cart_id} lost the race, returning order {winner.id}"
            )
            return order_snapshot(winner)

        logger.info(
            f"Order {created.id} created from cart {cart_id}, grand total {created.grand_total}"
        )
        return order_snapshot(created)

    def get_orders(self, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        if page < 1:
            raise ValidationError("Invalid page", details=[{"path": "page", "issue": "must be >= 1"}])
        if limit < 1 or limit > MAX_PAGE_LIMIT:
            raise ValidationError(
                "Invalid limit",
                details=[{"path": "limit", "issue": f"must be between 1 and {MAX_PAGE_LIMIT}"}],
            )

        orders = self.repo.list_orders(offset=(page - 1) * limit, limit=limit)
        total = self.repo.count_orders()

        return {
            "orders": [order_snapshot(o) for o in orders],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": (total + limit - 1) // limit,
            },
        }

    def get_order_by_id(self, order_id: str) -> Dict[str, Any]:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")
        return order_snapshot(order)

    def get_order_by_cart_id(self, cart_id: str) -> Dict[str, Any]:
        order = self.repo.get_order_by_cart_id(cart_id)
        if not order:
            raise NotFoundError("Order not found")
        return order_snapshot(order)

    def update_order_status(self, order_id: str, status: str) -> Dict[str, Any]:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")

        # brak grafu przejsc, kazdy status moze przejsc w kazdy
        if status not in ORDER_STATUSES:
            raise ConflictError("Invalid order status")

        updated = self.repo.update_order_status(order, status)

        logger.info(f"Order {order_id} status -> {status}")
        return order_snapshot(updated)
