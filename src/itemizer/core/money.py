#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer cents internally,
plus the amount comparator used by every matching decision.

Amount comparisons never use exact equality: two amounts match when they
differ by less than AMOUNT_TOLERANCE. All matching code goes through
amounts_match() and total_amount() so rounding behavior lives in one place.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol, Union

from .currency import (
    cents_to_dollars_str,
    decimal_to_cents,
    parse_dollars_to_cents,
)


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in cents.

    Supports both positive (credits/refunds) and negative (debits/charges) amounts.

    Examples:
        >>> charge = Money.from_dollars("-45.99")
        >>> str(charge)
        '$-45.99'
        >>> charge.to_cents()
        -4599
        >>> Money.from_float(-12.3).to_cents()
        -1230
    """

    cents: int

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from cents."""
        return cls(cents=cents)

    @classmethod
    def from_dollars(cls, dollars: str | int) -> "Money":
        """
        Parse from dollar string like '$123.45' or integer dollars.

        Args:
            dollars: String like "$12.34" or integer like 12

        Returns:
            Money object
        """
        if isinstance(dollars, int):
            return cls(cents=dollars * 100)
        return cls(cents=parse_dollars_to_cents(dollars))

    @classmethod
    def from_float(cls, value: Union[float, int, Decimal]) -> "Money":
        """
        Create Money from a JSON number in dollars (ledger API format).

        Args:
            value: Dollar amount, e.g. -12.34

        Returns:
            Money object rounded to the nearest cent
        """
        return cls(cents=decimal_to_cents(value))

    @classmethod
    def zero(cls) -> "Money":
        """Zero amount."""
        return cls(cents=0)

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def to_float(self) -> float:
        """Get value in dollars as a JSON-friendly number."""
        return float(Decimal(self.cents) / 100)

    def to_dollars(self) -> str:
        """Get formatted dollar string."""
        return str(self)

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(cents=abs(self.cents))

    def is_debit(self) -> bool:
        """Check whether this is a charge (negative amount)."""
        return self.cents < 0

    def __neg__(self) -> "Money":
        """Negate the amount."""
        return Money(cents=-self.cents)

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(cents=self.cents + other.cents)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(cents=self.cents - other.cents)

    def __mul__(self, scalar: int) -> "Money":
        """Multiply Money by integer scalar."""
        return Money(cents=self.cents * scalar)

    def __lt__(self, other: "Money") -> bool:
        """Less than comparison."""
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        """Less than or equal comparison."""
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        """Greater than comparison."""
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        """Greater than or equal comparison."""
        return self.cents >= other.cents

    def __str__(self) -> str:
        """Format as dollar string."""
        return f"${cents_to_dollars_str(self.cents)}"

    def __repr__(self) -> str:
        """Repr format."""
        return f"Money(cents={self.cents})"


AMOUNT_TOLERANCE = Money.from_cents(1)


class HasAmount(Protocol):
    """Anything carrying a monetary amount (line items, shipments, transactions)."""

    @property
    def amount(self) -> Money: ...


def amounts_match(a: Money, b: Money) -> bool:
    """Check whether two amounts are equal within AMOUNT_TOLERANCE."""
    return (a - b).abs() < AMOUNT_TOLERANCE


def total_amount(items: Iterable[HasAmount]) -> Money:
    """
    Sum the amounts of a collection.

    Args:
        items: Objects exposing an ``amount`` Money attribute

    Returns:
        Total amount (zero for an empty collection)
    """
    total = Money.zero()
    for item in items:
        total = total + item.amount
    return total
