# storefront/services/product_client.py
import requests

from storefront.domain.products import Inventory, Product
from storefront.utils.retry import http_retry
from storefront.utils.settings import PRODUCT_SERVICE_URL, INVENTORY_PATH
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ProductClient:
    def __init__(self, base_url: str | None = None, timeout: int = 2):
        self.base_url = (base_url or PRODUCT_SERVICE_URL).rstrip("/")
        self.timeout = timeout

    @http_retry()
    def fetch_products(self) -> list[Product]:
        url = f"{self.base_url}/products"
        logger.info(f"ProductClient GET {url}")

        resp = requests.get(url, timeout=self.timeout)
        resp.raise_for_status()
        return [Product.model_validate(p) for p in resp.json()]

    @http_retry()
    def fetch_product(self, product_id: str) -> Product | None:
        url = f"{self.base_url}/products/{product_id}"
        logger.info(f"ProductClient GET {url}")

        resp = requests.get(url, timeout=self.timeout)
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return Product.model_validate(resp.json())

    def fetch_inventory(self) -> Inventory:
        return Inventory(self.fetch_products())


def load_inventory(product_service_url: str = PRODUCT_SERVICE_URL, path: str = INVENTORY_PATH) -> Inventory:
    """Katalog z product-service jesli skonfigurowany, inaczej z pliku json w paczce."""
    if product_service_url:
        return ProductClient(product_service_url).fetch_inventory()
    return Inventory.from_file(path)
