#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Immutable date wrapper with consistent formatting for ledger entries,
orders, shipments and refunds.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta


@dataclass(frozen=True, order=True)
class FinancialDate:
    """Immutable financial date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse from string in specified format.

        Args:
            date_str: Date string to parse
            format: Date format (default: ISO format "%Y-%m-%d")

        Returns:
            FinancialDate object
        """
        return cls(date=datetime.strptime(date_str, format).date())

    @classmethod
    def from_iso_prefix(cls, value: str) -> "FinancialDate":
        """
        Parse the date part of an ISO-8601 timestamp.

        Extracts use full timestamps ("2024-01-01T12:00:00Z"); only the
        calendar date is kept.
        """
        return cls.from_string(value.strip()[:10])

    @classmethod
    def today(cls) -> "FinancialDate":
        """Get today's date."""
        return cls(date=date.today())

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def days_until(self, other: "FinancialDate") -> int:
        """Signed number of days from this date to another."""
        return (other.date - self.date).days

    def distance_days(self, other: "FinancialDate") -> int:
        """Absolute number of days between two dates."""
        return abs(self.days_until(other))

    def shifted(self, days: int) -> "FinancialDate":
        """Return a new date shifted by a number of days (negative for earlier)."""
        return FinancialDate(date=self.date + timedelta(days=days))

    def within_window(self, start: "FinancialDate", window: timedelta) -> bool:
        """Check whether this date falls in [start, start + window], inclusive."""
        return start.date <= self.date <= start.date + window

    def __str__(self) -> str:
        """String representation."""
        return self.to_iso_string()

    def __repr__(self) -> str:
        """Repr format."""
        return f"FinancialDate(date={self.date!r})"
