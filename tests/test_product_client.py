from unittest.mock import MagicMock, patch

import pytest
import requests
from fastapi.testclient import TestClient

from storefront.domain.products import Inventory
from storefront.product_service.main import create_app as create_product_service
from storefront.services.product_client import ProductClient, load_inventory
from storefront.utils.settings import INVENTORY_PATH


def _response(payload, status_code=200):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    return resp


class TestBundledCatalogue:
    def test_load_from_file(self):
        inventory = load_inventory(product_service_url="", path=INVENTORY_PATH)

        assert len(inventory) > 0
        product = inventory.find_by_slug("ocean-blue-shirt")
        assert product.price == 5000
        assert inventory.find(product.id) is product

    def test_unknown_product(self):
        inventory = Inventory.from_file(INVENTORY_PATH)
        assert inventory.find("does-not-exist") is None


class TestProductClient:
    @patch("storefront.services.product_client.requests.get")
    def test_fetch_inventory(self, mock_get):
        mock_get.return_value = _response(
            [
                {"id": "p1", "slug": "shirt", "title": "Shirt", "price": 1000},
                {"id": "p2", "slug": "hat", "title": "Hat", "price": 5000, "src": "https://img.test/hat.jpg"},
            ]
        )

        inventory = ProductClient("http://products.test/").fetch_inventory()

        mock_get.assert_called_once_with("http://products.test/products", timeout=2)
        assert inventory.find("p2").src == "https://img.test/hat.jpg"

    @patch("storefront.services.product_client.requests.get")
    def test_fetch_missing_product(self, mock_get):
        mock_get.return_value = _response({"detail": "Product not found"}, status_code=404)

        assert ProductClient("http://products.test").fetch_product("nope") is None

    @patch("storefront.services.product_client.requests.get")
    def test_retries_connection_errors(self, mock_get):
        mock_get.side_effect = [
            requests.ConnectionError("down"),
            _response({"id": "p1", "slug": "shirt", "title": "Shirt", "price": 1000}),
        ]

        product = ProductClient("http://products.test").fetch_product("p1")

        assert product.id == "p1"
        assert mock_get.call_count == 2

    @patch("storefront.services.product_client.requests.get")
    def test_server_errors_are_not_retried(self, mock_get):
        mock_get.return_value = _response({}, status_code=500)

        with pytest.raises(requests.HTTPError):
            ProductClient("http://products.test").fetch_products()
        assert mock_get.call_count == 1


class TestProductService:
    @pytest.fixture
    def service(self, inventory):
        return TestClient(create_product_service(inventory))

    def test_list(self, service):
        response = service.get("/products")

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == ["p1", "p2", "p3"]

    def test_get(self, service):
        assert service.get("/products/p2").json()["price"] == 5000
        assert service.get("/products/nope").status_code == 404
