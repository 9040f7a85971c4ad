# storefront/domain/products.py
import json
from pathlib import Path
from typing import Iterable, List

from pydantic import BaseModel, Field, ConfigDict

from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class Product(BaseModel):
    """Wpis katalogu, tylko do odczytu."""

    id: str
    slug: str
    title: str
    price: int = Field(..., ge=0, description="Cena w groszach/centach")
    src: str | None = None
    body: str | None = None

    model_config = ConfigDict(frozen=True)


class Inventory:
    """
    Zaufane zrodlo cen i identyfikatorow produktow,
    koszyk nigdy go nie modyfikuje
    """

    def __init__(self, products: Iterable[Product]):
        self._products: List[Product] = list(products)
        self._by_id = {p.id: p for p in self._products}
        self._by_slug = {p.slug: p for p in self._products}

    @classmethod
    def from_file(cls, path: str | Path) -> "Inventory":
        with open(path, encoding="utf-8") as fh:
            raw = json.load(fh)
        products = [Product.model_validate(p) for p in raw]
        logger.info(f"Loaded {len(products)} products from {path}")
        return cls(products)

    def all(self) -> List[Product]:
        return list(self._products)

    def find(self, product_id: str) -> Product | None:
        return self._by_id.get(product_id)

    def find_by_slug(self, slug: str) -> Product | None:
        return self._by_slug.get(slug)

    def __len__(self) -> int:
        return len(self._products)
