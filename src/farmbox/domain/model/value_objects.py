"""Money, quantities and the partial-update marker.

Prices on the storefront are Tunisian dinars, which divide into 1000
millimes. Every amount is held to the millime.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import total_ordering
from typing import Iterable

from farmbox.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "TND"
MILLIME = Decimal("0.001")


@total_ordering
@dataclass(frozen=True)
class Money:
    """An amount of one currency, rounded half-up to three decimals."""

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, not {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise ValidationError(f"Money amount cannot be negative ({self.amount})")
        object.__setattr__(self, "amount", self.amount.quantize(MILLIME, ROUND_HALF_UP))

    @staticmethod
    def of(amount: str | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Build from user or file input such as ``"29.990"`` or ``30``."""
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal(0), currency)

    @staticmethod
    def sum(amounts: Iterable[Money], currency: str = DEFAULT_CURRENCY) -> Money:
        """Add up *amounts*; an empty iterable gives zero in *currency*."""
        total = Money.zero(currency)
        for amount in amounts:
            total = total + amount
        return total

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + self._same_currency(other).amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        difference = self.amount - self._same_currency(other).amount
        if difference < 0:
            raise ValidationError(
                f"Subtracting {other} from {self} gives a negative amount"
            )
        return Money(difference, self.currency)

    def __mul__(self, quantity: int) -> Money:
        if not isinstance(quantity, int):
            raise TypeError(f"Money can only be multiplied by an int, not {type(quantity).__name__}")
        return Money(self.amount * quantity, self.currency)

    def __lt__(self, other: Money) -> bool:
        return self.amount < self._same_currency(other).amount

    def shortfall_to(self, target: Money) -> Money:
        """How much must be added to reach *target* (zero if already there)."""
        if self >= target:
            return Money.zero(self.currency)
        return target - self

    @property
    def is_zero(self) -> bool:
        return not self.amount

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    def _same_currency(self, other: Money) -> Money:
        if other.currency != self.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")
        return other


@dataclass(frozen=True)
class Quantity:
    """How many units of a product a line holds. Always at least one."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, not {type(self.value).__name__}"
            )
        if self.value < 1:
            raise ValidationError(f"Quantity must be positive, got {self.value}")

    def __str__(self) -> str:
        return str(self.value)


class Unset:
    """Marker for "leave this field alone" in partial updates.

    Distinct from ``None`` and ``""`` so an update can clear a field.
    """

    _instance: Unset | None = None

    def __new__(cls) -> Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = Unset()
