"""Price entity: one amount of a product in one currency."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from storefront.domain.exceptions import InvalidArgumentError
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Currency, Money


@dataclass
class Price:
    """A product price.

    A product may carry several prices, one per currency. ``amount.currency``
    holds the currency label (e.g. ``USD``); the symbol is kept alongside
    for display.
    """

    product_id: str
    amount: Money
    symbol: str
    id: int | None = None

    @property
    def label(self) -> str:
        return self.amount.currency

    @property
    def currency(self) -> Currency:
        return Currency(label=self.label, symbol=self.symbol)

    def validate(self) -> bool:
        return bool(self.product_id) and bool(self.label) and bool(self.symbol)

    def formatted(self) -> str:
        return f"{self.symbol}{self.amount.amount:,.2f}"

    def formatted_with_label(self) -> str:
        return f"{self.formatted()} {self.label}"

    def is_default_currency(self) -> bool:
        return self.label.upper() == DEFAULT_CURRENCY

    def is_lower_than(self, other: Price) -> bool:
        if self.label != other.label:
            raise InvalidArgumentError("Cannot compare prices with different currencies")
        return self.amount < other.amount

    def discount_percentage(self, original: Price) -> float:
        """Percentage saved relative to *original*; 0.0 when it is free."""
        if self.label != original.label:
            raise InvalidArgumentError(
                "Cannot calculate discount for different currencies"
            )
        if original.amount.is_zero:
            return 0.0
        saved = (original.amount.amount - self.amount.amount) / original.amount.amount
        return float(saved * Decimal("100"))

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def from_payload(product_id: str, raw: dict) -> Price:
        """Build from the seed/GraphQL shape ``{amount, currency: {label, symbol}}``."""
        currency = raw.get("currency") or {}
        return Price(
            product_id=product_id,
            amount=Money.of(raw.get("amount", 0), currency.get("label") or DEFAULT_CURRENCY),
            symbol=currency.get("symbol", ""),
        )

    def to_dict(self) -> dict:
        return {
            "amount": float(self.amount.amount),
            "currency": {"label": self.label, "symbol": self.symbol},
        }
