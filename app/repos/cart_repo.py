# app/repos/cart_repo.py
from datetime import datetime, timezone

from sqlalchemy import select, exists
from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.data.models.order import OrderModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart(self, cart_id: str) -> CartModel | None:
        return self.db.get(CartModel, cart_id)

    def get_cart_by_token(self, token: str) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.token == token)
        ).scalar_one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def save_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def get_cart_items(self, cart_id: str) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.cart_id == cart_id)
                .order_by(CartItemModel.created_at)
            ).scalars().all()
        )

    def get_cart_item(self, cart_id: str, sku: str) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.sku == sku,
            )
        ).scalar_one_or_none()

    def upsert_cart_item(self, cart: CartModel, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.touch(cart)
        self.db.commit()
        return item

    def delete_cart_item(self, cart: CartModel, item: CartItemModel) -> None:
        self.db.delete(item)
        self.touch(cart)
        self.db.commit()

    def touch(self, cart: CartModel) -> None:
        # onupdate nie odpala sie gdy zmienia sie tylko pozycja koszyka
        cart.updated_at = datetime.now(timezone.utc)
        self.db.add(cart)

    def list_stale_carts(self, older_than) -> list[CartModel]:
        """Koszyki bez aktywnosci od `older_than`, ktore nie maja zamowienia."""
        has_order = exists().where(OrderModel.cart_id == CartModel.id)
        return list(
            self.db.execute(
                select(CartModel).where(
                    CartModel.updated_at < older_than,
                    ~has_order,
                )
            ).scalars().all()
        )

    def delete_cart(self, cart: CartModel) -> None:
        self.db.delete(cart)

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
