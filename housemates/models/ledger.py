"""
Core Ledger Models for Housemates

These types describe what the ledger hands back to its callers.
Results are returned as values, never raised, so a caller can always
tell a rejected request apart from a programming error.
"""

from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ResultCode(str, Enum):
    """
    Outcome of a ledger operation.

    SUCCESS is shared by every operation. The rest name the single
    reason a request was refused; a refused request never mutates state.
    """
    SUCCESS = "SUCCESS"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"  # House is full
    UNKNOWN_MEMBER = "UNKNOWN_MEMBER"        # Name is not a current resident
    BLOCKED = "BLOCKED"                      # Resident still has open dues
    OVERPAYMENT = "OVERPAYMENT"              # Payment larger than the due


class RoundingMode(str, Enum):
    """
    How an expense share is rounded to a whole amount.

    HALF_UP rounds .5 away from zero (1001 / 2 -> 501).
    HALF_EVEN rounds .5 to the nearest even number (1001 / 2 -> 500).
    """
    HALF_UP = "half_up"
    HALF_EVEN = "half_even"

    @property
    def decimal_rounding(self) -> str:
        """The matching `decimal` module rounding constant."""
        if self is RoundingMode.HALF_EVEN:
            return ROUND_HALF_EVEN
        return ROUND_HALF_UP


# =============================================================================
# REPORTING MODELS
# =============================================================================

class Balance(BaseModel):
    """
    What one resident owes one other resident.

    Zero is a valid amount: every other resident is listed,
    whether or not anything is owed to them.
    """
    model_config = ConfigDict(frozen=True)

    counterparty: str = Field(
        ...,
        min_length=1,
        description="Resident the amount is owed to"
    )
    amount: int = Field(
        ...,
        ge=0,
        description="Amount owed (0 when nothing is owed)"
    )

    @property
    def sort_key(self) -> tuple[int, str]:
        """Largest amount first, then alphabetical by counterparty."""
        return (-self.amount, self.counterparty)

    def __str__(self) -> str:
        return f"{self.counterparty} {self.amount}"
