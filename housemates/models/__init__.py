"""
Data Models Package

This package contains all Pydantic models and enums used in Housemates.
Everything that crosses a layer boundary conforms to these schemas.
"""

from housemates.models.ledger import (
    Balance,
    ResultCode,
    RoundingMode,
)
from housemates.models.command import (
    ClearDue,
    Command,
    CommandName,
    CommandOutcome,
    Dues,
    MoveIn,
    MoveOut,
    Spend,
)
from housemates.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)

__all__ = [
    # Ledger models
    "Balance",
    "ResultCode",
    "RoundingMode",
    # Command models
    "ClearDue",
    "Command",
    "CommandName",
    "CommandOutcome",
    "Dues",
    "MoveIn",
    "MoveOut",
    "Spend",
    # Activity models
    "ActivityEvent",
    "ActivityEventBuilder",
    "ActivityEventType",
    "ActivitySeverity",
]
