# storefront/utils/settings.py
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")

CURRENCY_CODE = os.getenv("CURRENCY_CODE", "USD")
# locale formatowania kwot (babel)
MONEY_LOCALE = os.getenv("MONEY_LOCALE", "en_US")
APP_ORIGIN = os.getenv("APP_ORIGIN", "http://localhost:3000").rstrip("/")

STRIPE_SECRET_KEY = os.getenv("STRIPE_SECRET_KEY", "")
STRIPE_WEBHOOK_SECRET = os.getenv("STRIPE_WEBHOOK_SECRET", "")

# pusty = katalog z pliku w paczce
PRODUCT_SERVICE_URL = os.getenv("PRODUCT_SERVICE_URL", "")
INVENTORY_PATH = os.getenv(
    "INVENTORY_PATH",
    str(Path(__file__).resolve().parent.parent / "data" / "products.json"),
)

CART_COOKIE_NAME = os.getenv("CART_COOKIE_NAME", "cartId")
CART_COOKIE_MAX_AGE = int(os.getenv("CART_COOKIE_MAX_AGE", 30 * 24 * 60 * 60))

CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/1")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")
CELERY_TASK_ALWAYS_EAGER = os.getenv("CELERY_TASK_ALWAYS_EAGER", "false").lower() in ("1", "true", "yes")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = os.getenv("LOG_JSON", "false").lower() in ("1", "true", "yes")
