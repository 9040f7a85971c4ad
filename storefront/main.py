# storefront/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from storefront.api import register_routers
from storefront.data.database import Base, Database
from storefront.domain.products import Inventory
from storefront.services.fulfillment_service import Notifier
from storefront.services.payment_gateway import FakeGateway, PaymentGateway, StripeGateway
from storefront.services.product_client import load_inventory
from storefront.utils.logging import configure_logging, get_logger
from storefront.utils.settings import (
    APP_ORIGIN,
    CURRENCY_CODE,
    DATABASE_URL,
    STRIPE_SECRET_KEY,
    STRIPE_WEBHOOK_SECRET,
)

logger = get_logger(__name__)


def default_gateway() -> PaymentGateway:
    if STRIPE_SECRET_KEY:
        return StripeGateway(api_key=STRIPE_SECRET_KEY, webhook_secret=STRIPE_WEBHOOK_SECRET)
    logger.warning("STRIPE_SECRET_KEY not set, using FakeGateway")
    return FakeGateway()


def create_app(
    database: Database | None = None,
    inventory: Inventory | None = None,
    gateway: PaymentGateway | None = None,
    notifier: Notifier | None = None,
    currency: str = CURRENCY_CODE,
    origin: str = APP_ORIGIN,
) -> FastAPI:
    """
    Wszystkie zaleznosci tworzone tutaj i trzymane na app.state,
    handlery dostaja je przez request (brak globalnego klienta bazy)
    """
    configure_logging()

    owns_database = database is None
    database = database or Database(DATABASE_URL)

    logger.info("Initializing database")
    database.create_all()
    logger.info(f"Database ready, tables: {sorted(Base.metadata.tables)}")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owns_database:
            database.dispose()

    app = FastAPI(
        title="Storefront",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.database = database
    app.state.inventory = inventory or load_inventory()
    app.state.gateway = gateway or default_gateway()
    app.state.notifier = notifier
    app.state.currency = currency
    app.state.origin = origin

    register_routers(app)

    return app


if __name__ == "__main__":
    uvicorn.run("storefront.main:create_app", factory=True, host="0.0.0.0", port=8000)
