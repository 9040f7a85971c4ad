"""
Pytest configuration and fixtures.
"""
import pytest
from fastapi.testclient import TestClient

from storefront.data.database import Database
from storefront.domain.products import Inventory, Product
from storefront.main import create_app
from storefront.services.payment_gateway import FakeGateway


class RecordingNotifier:
    """Stands in for the Celery notification so tests never need a broker."""

    def __init__(self):
        self.calls = []

    def __call__(self, order_id, cart_id, customer_email):
        self.calls.append((order_id, cart_id, customer_email))


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.drop_all()
    db.dispose()


@pytest.fixture
def file_database(tmp_path):
    """File-backed SQLite so separate sessions/threads use separate connections."""
    db = Database(f"sqlite:///{tmp_path / 'storefront.db'}")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    s = database.session()
    yield s
    s.close()


@pytest.fixture
def inventory():
    return Inventory(
        [
            Product(id="p1", slug="shirt", title="Shirt", price=1000, src="https://img.test/shirt.jpg"),
            Product(id="p2", slug="hat", title="Hat", price=5000),
            Product(id="p3", slug="scarf", title="Scarf", price=2500, body="<p>Warm</p>"),
        ]
    )


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def app(database, inventory, gateway, notifier):
    return create_app(
        database=database,
        inventory=inventory,
        gateway=gateway,
        notifier=notifier,
        currency="USD",
        origin="http://shop.test",
    )


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
