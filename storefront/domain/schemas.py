# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List


class AddItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    cart_id: str = Field(..., min_length=1, max_length=64, description="ID koszyka (cookie klienta)")
    id: str = Field(..., min_length=1, max_length=64, description="ID produktu")
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    image: str | None = None
    price: int = Field(..., ge=0, description="Cena w groszach/centach")
    quantity: int = Field(1, gt=0, description="Ilosc (domyslnie 1)")

    @field_validator("cart_id", "id", "name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class CartItemKeyIn(BaseModel):
    """Schema dla increase/decrease/remove."""

    cart_id: str = Field(..., min_length=1, max_length=64)
    id: str = Field(..., min_length=1, max_length=64)


class CartIdIn(BaseModel):
    """Schema dla zapytania o koszyk."""

    cart_id: str = Field(..., min_length=1, max_length=64)


class CreateCheckoutSessionIn(BaseModel):
    cart_id: str = Field(..., min_length=1, max_length=64)


class MoneyOut(BaseModel):
    amount: int
    formatted: str


class CartItemOut(BaseModel):
    """Schema dla produktu w koszyku (response)."""

    id: str
    name: str
    description: str | None = None
    image: str | None = None
    quantity: int
    unit_total: MoneyOut
    line_total: MoneyOut


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    id: str
    total_items: int
    items: List[CartItemOut]
    sub_total: MoneyOut

    model_config = ConfigDict(from_attributes=True)


class LineItem(BaseModel):
    """Pozycja przekazywana do operatora platnosci, cena zawsze z katalogu."""

    name: str
    description: str | None = None
    image: str | None = None
    unit_amount: int
    quantity: int
    currency: str

    model_config = ConfigDict(frozen=True)


class CheckoutSessionOut(BaseModel):
    id: str
    url: str | None = None


class CheckoutSessionDetailsOut(BaseModel):
    id: str
    cart_id: str | None = None
    status: str | None = None
    payment_status: str | None = None
    amount_total: int | None = None
    customer_email: str | None = None
