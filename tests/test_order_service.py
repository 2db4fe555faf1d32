from datetime import datetime, timezone, timedelta
from unittest import TestCase
from unittest.mock import patch

from app.domain.errors import ConflictError, NotFoundError, ValidationError
from app.services.cart_service import CartService
from app.services.catalog import SqlCatalogLookup
from app.services.order_service import OrderService
from app.services.promo_lookup import SqlPromoLookup

from tests.factories import reset_db, make_variant, make_promo


class OrderServiceTestCase(TestCase):

    def setUp(self):
        self.db = reset_db()
        make_variant(self.db, sku="TEST-SKU-001", price=5000, stock=10)
        make_promo(self.db, "CHECKOUT10", "percent", "10")
        self.carts = CartService(self.db, SqlCatalogLookup(self.db), SqlPromoLookup(self.db))
        self.orders = OrderService(self.db, promos=SqlPromoLookup(self.db))

    def tearDown(self):
        self.db.close()

    def new_cart(self, qty=2, promo=None):
        token = self.carts.ensure_cart(None)
        cart = None
        if qty:
            cart = self.carts.add_item(token, "TEST-SKU-001", qty)
        if promo:
            cart = self.carts.apply_promo(token, promo)
        return token, (cart or self.carts.get_cart(token))["id"]


class CheckoutTests(OrderServiceTestCase):

    def test_checkout_creates_order_snapshot(self):
        _, cart_id = self.new_cart(qty=2)

        order = self.orders.create_order(cart_id)

        self.assertEqual(order["cart_id"], cart_id)
        self.assertEqual(order["status"], "created")
        self.assertEqual(len(order["items"]), 1)
        self.assertEqual(order["items"][0]["sku"], "TEST-SKU-001")
        self.assertEqual(order["items"][0]["qty"], 2)
        self.assertEqual(order["items"][0]["line_total"], 10000)
        self.assertEqual(order["subtotal"], 10000)
        self.assertEqual(order["discount"], 0)
        self.assertEqual(order["grand_total"], 10000)
        self.assertIsNone(order["promo_code"])

    def test_checkout_with_promo(self):
        _, cart_id = self.new_cart(qty=2, promo="CHECKOUT10")

        order = self.orders.create_order(cart_id)

        self.assertEqual(order["promo_code"], "CHECKOUT10")
        self.assertEqual(order["discount"], 1000)
        self.assertEqual(order["grand_total"], 9000)

    def test_empty_cart_is_conflict(self):
        _, cart_id = self.new_cart(qty=0)

        with self.assertRaises(ConflictError):
            self.orders.create_order(cart_id)

    def test_unknown_cart_is_not_found(self):
        with self.assertRaises(NotFoundError):
            self.orders.create_order("non-existent-cart-id")

    def test_expired_promo_at_checkout_gives_zero_discount(self):
        """
        Cart accepted the promo earlier; checkout re-validates it live
        and silently drops the discount instead of failing.
        """
        _, cart_id = self.new_cart(qty=2, promo="CHECKOUT10")
        later = OrderService(
            self.db,
            promos=SqlPromoLookup(self.db),
            clock=lambda: datetime.now(timezone.utc) + timedelta(days=2),
        )

        order = later.create_order(cart_id)

        self.assertEqual(order["promo_code"], "CHECKOUT10")
        self.assertEqual(order["discount"], 0)
        self.assertEqual(order["grand_total"], 10000)

    def test_multiple_lines_keep_cart_order(self):
        make_variant(self.db, sku="SECOND", price=1234, stock=5, title="Second")
        token, cart_id = self.new_cart(qty=1)
        self.carts.add_item(token, "SECOND", 3)

        order = self.orders.create_order(cart_id)

        self.assertEqual([i["sku"] for i in order["items"]], ["TEST-SKU-001", "SECOND"])
        self.assertEqual(order["subtotal"], 5000 + 3702)


class IdempotencyTests(OrderServiceTestCase):

    def test_second_checkout_returns_same_order(self):
        _, cart_id = self.new_cart(qty=1)

        first = self.orders.create_order(cart_id)
        second = self.orders.create_order(cart_id)

        self.assertEqual(second["id"], first["id"])
        self.assertEqual(second["items"], first["items"])
        self.assertEqual(second["grand_total"], 5000)
        self.assertEqual(self.orders.get_orders()["pagination"]["total"], 1)

    def test_replay_ignores_later_cart_changes(self):
        token, cart_id = self.new_cart(qty=1, promo="CHECKOUT10")
        first = self.orders.create_order(cart_id)

        self.carts.add_item(token, "TEST-SKU-001", 4)
        self.carts.remove_promo(token)
        second = self.orders.create_order(cart_id)

        self.assertEqual(second["id"], first["id"])
        self.assertEqual(second["subtotal"], 5000)
        self.assertEqual(second["discount"], 500)
        self.assertEqual(second["items"][0]["qty"], 1)

    def test_different_carts_get_different_orders(self):
        _, cart_a = self.new_cart(qty=1)
        _, cart_b = self.new_cart(qty=2)

        order_a = self.orders.create_order(cart_a)
        order_b = self.orders.create_order(cart_b)

        self.assertNotEqual(order_a["id"], order_b["id"])
        self.assertEqual(order_a["cart_id"], cart_a)
        self.assertEqual(order_b["cart_id"], cart_b)

    def test_lost_race_returns_winner_order(self):
        """
        Two checkouts both miss the existence check; the unique cart_id
        rejects the second insert and the winner's order is returned.
        """
        _, cart_id = self.new_cart(qty=1)
        winner = self.orders.create_order(cart_id)
        winner_model = self.orders.repo.get_order(winner["id"])

        with patch.object(
            self.orders.repo,
            "get_order_by_cart_id",
            side_effect=[None, winner_model],
        ):
            result = self.orders.create_order(cart_id)

        self.assertEqual(result["id"], winner["id"])
        self.assertEqual(self.orders.repo.count_orders(), 1)


class OrderQueryTests(OrderServiceTestCase):

    def test_get_order_by_id(self):
        _, cart_id = self.new_cart(qty=1)
        created = self.orders.create_order(cart_id)

        order = self.orders.get_order_by_id(created["id"])

        self.assertEqual(order["id"], created["id"])
        self.assertEqual(order["items"], created["items"])

    def test_get_order_by_id_missing(self):
        with self.assertRaises(NotFoundError):
            self.orders.get_order_by_id("missing")

    def test_get_order_by_cart_id(self):
        _, cart_id = self.new_cart(qty=1)
        created = self.orders.create_order(cart_id)

        self.assertEqual(self.orders.get_order_by_cart_id(cart_id)["id"], created["id"])

        _, other = self.new_cart(qty=1)
        with self.assertRaises(NotFoundError):
            self.orders.get_order_by_cart_id(other)

    def test_pagination_newest_first(self):
        ids = []
        for _ in range(3):
            _, cart_id = self.new_cart(qty=1)
            ids.append(self.orders.create_order(cart_id)["id"])

        page1 = self.orders.get_orders(page=1, limit=2)
        page2 = self.orders.get_orders(page=2, limit=2)

        self.assertEqual(page1["pagination"], {"page": 1, "limit": 2, "total": 3, "pages": 2})
        self.assertEqual([o["id"] for o in page1["orders"]], [ids[2], ids[1]])
        self.assertEqual([o["id"] for o in page2["orders"]], [ids[0]])

    def test_empty_listing(self):
        result = self.orders.get_orders()

        self.assertEqual(result["orders"], [])
        self.assertEqual(result["pagination"]["pages"], 0)

    def test_invalid_pagination(self):
        with self.assertRaises(ValidationError):
            self.orders.get_orders(page=0)
        with self.assertRaises(ValidationError):
            self.orders.get_orders(limit=0)


class OrderStatusTests(OrderServiceTestCase):

    def setUp(self):
        super().setUp()
        _, cart_id = self.new_cart(qty=2, promo="CHECKOUT10")
        self.order = self.orders.create_order(cart_id)

    def test_any_status_can_move_to_any_other(self):
        for status in ("paid", "cancelled", "created", "cancelled", "paid"):
            updated = self.orders.update_order_status(self.order["id"], status)
            self.assertEqual(updated["status"], status)

    def test_status_change_keeps_totals(self):
        updated = self.orders.update_order_status(self.order["id"], "paid")

        self.assertEqual(updated["subtotal"], self.order["subtotal"])
        self.assertEqual(updated["discount"], self.order["discount"])
        self.assertEqual(updated["grand_total"], self.order["grand_total"])
        self.assertEqual(updated["items"], self.order["items"])

    def test_invalid_status_is_conflict(self):
        with self.assertRaises(ConflictError):
            self.orders.update_order_status(self.order["id"], "shipped")

    def test_missing_order_is_not_found(self):
        with self.assertRaises(NotFoundError):
            self.orders.update_order_status("missing", "paid")
