# app/services/catalog.py
import requests
from sqlalchemy.orm import Session

from app.domain.lookups import CatalogEntry
from app.repos.product_repo import ProductRepo
from app.utils.retry import http_retry
from app.utils.settings import CATALOG_BACKEND, CATALOG_SERVICE_URL
from app.utils.logging import get_logger

logger = get_logger(__name__)


class SqlCatalogLookup:
    """Katalog z lokalnej bazy (tabela variants + tytul produktu)."""

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def find_by_sku(self, sku: str) -> CatalogEntry | None:
        variant = self.repo.get_variant_by_sku(sku)
        if not variant:
            return None

        return CatalogEntry(
            sku=variant.sku,
            title=variant.product.title,
            unit_price=variant.price,
            currency=variant.currency,
            stock=variant.stock,
        )


class HttpCatalogLookup:
    """Katalog z zewnetrznego catalog-service po HTTP."""

    def __init__(self, base_url: str | None = None, timeout: int = 2):
        self.base_url = (base_url or CATALOG_SERVICE_URL).rstrip("/")
        self.timeout = timeout

    @http_retry()
    def _get(self, url: str) -> requests.Response:
        return requests.get(url, timeout=self.timeout)

    def find_by_sku(self, sku: str) -> CatalogEntry | None:
        url = f"{self.base_url}/variants/{sku}"
        logger.info(f"CatalogLookup GET {url}")

        resp = self._get(url)
        if resp.status_code == 404:
            return None
        resp.raise_for_status()

        data = resp.json()
        return CatalogEntry(
            sku=data["sku"],
            title=data["title"],
            unit_price=data["price"],
            currency=data["currency"],
            stock=data["stock"],
        )


def build_catalog(db: Session):
    if CATALOG_BACKEND == "http":
        return HttpCatalogLookup()
    return SqlCatalogLookup(db)
