#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from app.data.models.product import ProductModel
from app.data.models.variant import VariantModel
from app.data.models.promo import PromoModel
from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.data.models.order import OrderModel, ORDER_STATUSES
from app.data.models.order_item import OrderItemModel

__all__ = [
    "ProductModel",
    "VariantModel",
    "PromoModel",
    "CartModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "ORDER_STATUSES",
]
