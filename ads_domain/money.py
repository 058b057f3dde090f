"""Currency-aware amounts for bids, costs and wallet balances.

Amounts are ``Decimal`` quantised to the currency's minor units with banker's
rounding. Arithmetic and comparison between different currencies raise
``ValueError``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal
from functools import total_ordering
from typing import Any, Dict, List, Union

Number = Union[int, float, Decimal, str]

DEFAULT_CURRENCY = "TRY"

# ISO 4217 minor units; anything not listed uses 2
CURRENCY_UNITS = {
    "TRY": 2,
    "USD": 2,
    "EUR": 2,
    "GBP": 2,
    "JPY": 0,
    "KRW": 0,
}

_MONEY_TEXT = re.compile(r"^(?:([A-Z]{3})\s+(\S+)|(\S+)\s+([A-Z]{3})|(\S+))$")


def get_minor_units(currency: str) -> int:
    return CURRENCY_UNITS.get(currency.upper(), 2)


def to_decimal(value: Number) -> Decimal:
    """Decimal from any numeric input; floats go through ``str`` first."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


@total_ordering
@dataclass(frozen=True, eq=False)
class Money:
    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self):
        currency = self.currency.upper()
        step = Decimal(1).scaleb(-get_minor_units(currency))
        object.__setattr__(self, "currency", currency)
        object.__setattr__(self, "amount", to_decimal(self.amount).quantize(step, rounding=ROUND_HALF_EVEN))

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> Money:
        return cls(Decimal(0), currency)

    @classmethod
    def from_dollars(cls, amount: Number, currency: str = DEFAULT_CURRENCY) -> Money:
        """Amount in major units (lira, dollars, ...) of ``currency``."""
        return cls(to_decimal(amount), currency)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Money:
        return cls(to_decimal(str(data["amount"])), data.get("currency", DEFAULT_CURRENCY))

    def to_dict(self) -> Dict[str, str]:
        return {"amount": str(self.amount), "currency": self.currency}

    def to_decimal(self) -> Decimal:
        return self.amount

    def is_zero(self) -> bool:
        return self.amount == 0

    def _same_currency(self, other: Any, action: str) -> Money:
        if not isinstance(other, Money) or other.currency != self.currency:
            raise ValueError(f"Cannot {action} Money of different currencies")
        return other

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + self._same_currency(other, "add").amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        return Money(self.amount - self._same_currency(other, "subtract").amount, self.currency)

    def __mul__(self, factor: Number) -> Money:
        return Money(self.amount * to_decimal(factor), self.currency)

    __rmul__ = __mul__

    def __truediv__(self, divisor: Number) -> Money:
        divisor = to_decimal(divisor)
        if divisor == 0:
            raise ZeroDivisionError("Cannot divide Money by zero")
        return Money(self.amount / divisor, self.currency)

    def __neg__(self) -> Money:
        return Money(-self.amount, self.currency)

    def __abs__(self) -> Money:
        return Money(abs(self.amount), self.currency)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount == self._same_currency(other, "compare").amount

    def __lt__(self, other: Money) -> bool:
        return self.amount < self._same_currency(other, "compare").amount

    def __hash__(self) -> int:
        return hash((self.amount, self.currency))

    def __str__(self) -> str:
        return f"{self.currency} {self.amount}"

    def __repr__(self) -> str:
        return f"Money('{self.amount}', '{self.currency}')"

    def allocate(self, ratios: List[Number]) -> List[Money]:
        """Split by ``ratios``; rounding leftovers land on the last share so the sum is exact."""
        if not ratios:
            return []
        weights = [to_decimal(ratio) for ratio in ratios]
        total = sum(weights)
        if total == 0:
            raise ValueError("Total ratio cannot be zero")
        shares = [Money(self.amount * weight / total, self.currency) for weight in weights]
        leftover = self.amount - sum(share.amount for share in shares)
        if leftover:
            shares[-1] = Money(shares[-1].amount + leftover, self.currency)
        return shares


def money(amount: Number, currency: str = DEFAULT_CURRENCY) -> Money:
    return Money(to_decimal(amount), currency)


def parse_money(text: str) -> Money:
    """Parse ``"TRY 123.45"``, ``"123.45 TRY"`` or a bare amount in the default currency."""
    match = _MONEY_TEXT.match(text.strip())
    if match is None:
        raise ValueError(f"Unrecognised money value: {text!r}")
    prefix_currency, prefix_amount, suffix_amount, suffix_currency, bare = match.groups()
    if prefix_currency:
        return money(prefix_amount, prefix_currency)
    if suffix_currency:
        return money(suffix_amount, suffix_currency)
    return money(bare)


__all__ = ["Money", "money", "parse_money", "to_decimal", "get_minor_units", "DEFAULT_CURRENCY"]
