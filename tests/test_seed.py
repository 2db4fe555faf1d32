from datetime import datetime, timezone
from unittest import TestCase

from app.data.models import ProductModel, PromoModel, VariantModel
from app.data.seed import seed_catalog, DEMO_PRODUCTS
from app.services.promo_lookup import SqlPromoLookup

from tests.factories import reset_db


class SeedTests(TestCase):

    def setUp(self):
        self.db = reset_db()

    def tearDown(self):
        self.db.close()

    def test_seed_is_idempotent(self):
        self.assertTrue(seed_catalog(self.db))
        self.assertFalse(seed_catalog(self.db))

        self.assertEqual(self.db.query(ProductModel).count(), len(DEMO_PRODUCTS))
        self.assertEqual(
            self.db.query(VariantModel).count(),
            sum(len(p["variants"]) for p in DEMO_PRODUCTS),
        )
        self.assertEqual(self.db.query(PromoModel).count(), 5)

    def test_seeded_promos_are_usable_except_expired(self):
        seed_catalog(self.db)
        lookup = SqlPromoLookup(self.db)
        now = datetime.now(timezone.utc)

        self.assertIsNotNone(lookup.find_active_by_code("welcome10", now))
        self.assertEqual(lookup.find_active_by_code("FREESHIP", now).type, "fixed")
        self.assertIsNone(lookup.find_active_by_code("EXPIRED", now))
