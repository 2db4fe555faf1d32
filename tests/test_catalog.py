from unittest import TestCase
from unittest.mock import patch, MagicMock

import requests
from fastapi.testclient import TestClient

from app.catalog_service.main import app as catalog_app
from app.services.catalog import HttpCatalogLookup, SqlCatalogLookup, build_catalog

from tests.factories import reset_db, make_variant


def fake_response(status_code, payload=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload or {}
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code}")
    return resp


class SqlCatalogLookupTests(TestCase):

    def setUp(self):
        self.db = reset_db()
        make_variant(self.db, sku="HP-BLK-001", price=29900, stock=50, title="Headphones")

    def tearDown(self):
        self.db.close()

    def test_find_by_sku(self):
        entry = SqlCatalogLookup(self.db).find_by_sku("HP-BLK-001")

        self.assertEqual(entry.title, "Headphones")
        self.assertEqual(entry.unit_price, 29900)
        self.assertEqual(entry.currency, "USD")
        self.assertEqual(entry.stock, 50)

    def test_unknown_sku(self):
        self.assertIsNone(SqlCatalogLookup(self.db).find_by_sku("NOPE"))

    def test_build_catalog_defaults_to_db(self):
        self.assertIsInstance(build_catalog(self.db), SqlCatalogLookup)


class HttpCatalogLookupTests(TestCase):

    def setUp(self):
        self.lookup = HttpCatalogLookup(base_url="http://catalog.test/", timeout=1)

    @patch("app.services.catalog.requests.get")
    def test_find_by_sku(self, get):
        get.return_value = fake_response(200, {
            "sku": "HP-BLK-001",
            "title": "Headphones",
            "price": 29900,
            "currency": "USD",
            "stock": 50,
        })

        entry = self.lookup.find_by_sku("HP-BLK-001")

        get.assert_called_once_with("http://catalog.test/variants/HP-BLK-001", timeout=1)
        self.assertEqual(entry.unit_price, 29900)
        self.assertEqual(entry.stock, 50)

    @patch("app.services.catalog.requests.get")
    def test_404_means_unknown_sku(self, get):
        get.return_value = fake_response(404)

        self.assertIsNone(self.lookup.find_by_sku("NOPE"))

    @patch("app.services.catalog.requests.get")
    def test_server_error_is_raised(self, get):
        get.return_value = fake_response(500)

        with self.assertRaises(requests.HTTPError):
            self.lookup.find_by_sku("HP-BLK-001")
        self.assertEqual(get.call_count, 1)

    @patch("tenacity.nap.time.sleep")
    @patch("app.services.catalog.requests.get")
    def test_connection_errors_are_retried(self, get, _sleep):
        get.side_effect = [
            requests.ConnectionError("boom"),
            fake_response(200, {"sku": "X", "title": "X", "price": 1, "currency": "USD", "stock": 1}),
        ]

        entry = self.lookup.find_by_sku("X")

        self.assertEqual(entry.sku, "X")
        self.assertEqual(get.call_count, 2)

    @patch("tenacity.nap.time.sleep")
    @patch("app.services.catalog.requests.get")
    def test_gives_up_after_three_attempts(self, get, _sleep):
        get.side_effect = requests.Timeout("slow")

        with self.assertRaises(requests.Timeout):
            self.lookup.find_by_sku("X")
        self.assertEqual(get.call_count, 3)


class CatalogServiceMockTests(TestCase):
    """Dev mock catalog-service speaks the protocol HttpCatalogLookup expects."""

    def setUp(self):
        self.client = TestClient(catalog_app)

    def test_known_variant(self):
        resp = self.client.get("/variants/HP-BLK-001")

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["title"], "Premium Wireless Headphones")
        self.assertEqual(resp.json()["price"], 29900)

    def test_unknown_variant(self):
        self.assertEqual(self.client.get("/variants/NOPE").status_code, 404)
