# storefront/domain/money.py
from dataclasses import dataclass
from decimal import Decimal

from babel.numbers import format_currency, get_currency_precision

from storefront.utils.settings import CURRENCY_CODE, MONEY_LOCALE


def format_money(amount: int, currency: str = CURRENCY_CODE, locale: str = MONEY_LOCALE) -> str:
    """Kwota w najmniejszych jednostkach (grosze/centy) -> tekst, np. 2000 USD -> "$20.00"."""
    code = currency.upper()
    # liczba miejsc po przecinku z CLDR, JPY/KRW maja 0
    value = Decimal(amount).scaleb(-get_currency_precision(code))
    return format_currency(value, code, locale=locale)


@dataclass(frozen=True)
class Money:
    """Kwota w najmniejszych jednostkach jednej waluty."""
    amount: int
    currency: str = CURRENCY_CODE

    def __post_init__(self):
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise TypeError("Money amount must be an integer number of minor units")

    def add(self, other: "Money") -> "Money":
        if self.currency != other.currency:
            raise ValueError("Cannot add different currencies")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def multiply(self, factor: int) -> "Money":
        return Money(amount=self.amount * factor, currency=self.currency)

    @property
    def formatted(self) -> str:
        return format_money(self.amount, self.currency)
