"""Small immutable values used by prices and orders."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from storefront.domain.exceptions import InvalidArgumentError, ValidationError

DEFAULT_CURRENCY = "USD"


@dataclass(frozen=True)
class Money:
    """A non-negative Decimal amount tagged with a currency label.

    Amounts of different currencies never mix: adding or comparing them
    raises InvalidArgumentError.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Amount must be a Decimal, not {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Amount must be a finite number: {self.amount}")
        if self.amount < 0:
            raise ValidationError(f"Amount cannot be negative: {self.amount}")

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Parse *amount* through ``str`` so floats keep their printed digits."""
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        return Money(value, currency)

    @property
    def is_zero(self) -> bool:
        return not self.amount

    # --- Same-currency arithmetic ---------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + self._amount_of(other), self.currency)

    def __lt__(self, other: Money) -> bool:
        return self.amount < self._amount_of(other)

    def __gt__(self, other: Money) -> bool:
        return self.amount > self._amount_of(other)

    def _amount_of(self, other: Money) -> Decimal:
        if other.currency != self.currency:
            raise InvalidArgumentError(
                f"Cannot combine {self.currency} with {other.currency}"
            )
        return other.amount

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"


@dataclass(frozen=True)
class Currency:
    """Currency as shown to shoppers, e.g. ``Currency("USD", "$")``."""

    label: str
    symbol: str
