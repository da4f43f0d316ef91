"""
Shared Value Objects used across multiple domains.

Value Objects are immutable objects that describe characteristics of a thing.
Two value objects are equal if all their properties are equal.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum


# =============================================================================
# ENUMERATIONS
# =============================================================================

class GroupType(str, Enum):
    """Selection rule applied to the items of an assembly group."""

    REQUIRED = "REQUIRED"          # every item must be selected
    CHOOSE_ONE = "CHOOSE_ONE"      # exactly one item
    OPTIONAL = "OPTIONAL"          # any subset
    CONFLICT = "CONFLICT"          # items listed in conflicts_with exclude each other


class ProjectStatus(str, Enum):
    """Status of a project."""

    PLANNING = "PLANNING"
    APPROVED = "APPROVED"
    IN_PROGRESS = "IN_PROGRESS"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    DELAYED = "DELAYED"

    @property
    def is_terminal(self) -> bool:
        """Check if this is a terminal (final) status."""
        return self in (ProjectStatus.COMPLETED, ProjectStatus.CANCELLED)


# =============================================================================
# VALUE OBJECTS
# =============================================================================

@dataclass(frozen=True)
class Money:
    """
    Value object representing monetary amount.
    Immutable and includes currency.
    """

    amount: Decimal
    currency: str = "IDR"

    def __post_init__(self):
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")
        if len(self.currency) != 3:
            raise ValueError("Currency must be a 3-letter code")

    def quantize(self) -> Decimal:
        """Amount rounded to cents."""
        return self.amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"


@dataclass(frozen=True)
class Progress:
    """
    Value object representing progress percentage.
    """

    percent: Decimal

    def __post_init__(self):
        if not (0 <= self.percent <= 100):
            raise ValueError("Progress must be between 0 and 100")

    @classmethod
    def zero(cls) -> Progress:
        return cls(Decimal('0'))

    @classmethod
    def average(cls, values) -> Progress:
        """Mean of the given percentages, zero for an empty sequence."""
        values = [Decimal(str(v)) for v in values]
        if not values:
            return cls.zero()
        mean = sum(values, Decimal('0')) / len(values)
        return cls(mean.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP))

    @property
    def is_complete(self) -> bool:
        return self.percent >= 100

    def __str__(self) -> str:
        return f"{self.percent:.1f}%"
