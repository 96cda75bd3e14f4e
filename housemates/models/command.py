"""
Command Models for Housemates

Each input line becomes one of these typed commands before it reaches
the ledger. Field constraints here are the only argument validation the
system does: a command that builds is a command the ledger can run.

DESIGN DECISION: Commands are frozen Pydantic models.
A malformed argument fails loudly at construction time instead of
turning into a silently wrong ledger call.
"""

from decimal import Decimal
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from housemates.models.ledger import ResultCode


class CommandName(str, Enum):
    """Command keywords accepted on an input line."""
    MOVE_IN = "MOVE_IN"
    MOVE_OUT = "MOVE_OUT"
    SPEND = "SPEND"
    DUES = "DUES"
    CLEAR_DUE = "CLEAR_DUE"


class BaseCommand(BaseModel):
    """Common configuration for all commands."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class MoveIn(BaseCommand):
    """Admit a resident to the house."""
    name: Literal[CommandName.MOVE_IN] = CommandName.MOVE_IN
    member: str = Field(..., min_length=1)


class MoveOut(BaseCommand):
    """Remove a resident with no open dues."""
    name: Literal[CommandName.MOVE_OUT] = CommandName.MOVE_OUT
    member: str = Field(..., min_length=1)


class Spend(BaseCommand):
    """
    Record a shared expense.

    `shared_by` always starts with the payer, who carries a share too.
    """
    name: Literal[CommandName.SPEND] = CommandName.SPEND
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Total amount spent"
    )
    paid_by: str = Field(..., min_length=1)
    shared_by: list[str] = Field(
        ...,
        min_length=1,
        description="Everyone sharing the expense, payer first"
    )


class Dues(BaseCommand):
    """List what a resident owes everyone else."""
    name: Literal[CommandName.DUES] = CommandName.DUES
    member: str = Field(..., min_length=1)


class ClearDue(BaseCommand):
    """Pay back part or all of a recorded due."""
    name: Literal[CommandName.CLEAR_DUE] = CommandName.CLEAR_DUE
    borrower: str = Field(..., min_length=1)
    lender: str = Field(..., min_length=1)
    amount: int = Field(
        ...,
        ge=0,
        description="Amount being paid back"
    )


Command = Union[MoveIn, MoveOut, Spend, Dues, ClearDue]


class CommandOutcome(BaseModel):
    """
    Result of dispatching one command.

    `code` is None only when the ledger deliberately ignored the
    command (an expense with fewer than two people to share it).
    """

    command: CommandName
    code: Optional[ResultCode] = None
    member: Optional[str] = Field(
        default=None,
        description="Resident the command was about"
    )
    output: list[str] = Field(
        default_factory=list,
        description="Lines to print, in order"
    )

    @property
    def skipped(self) -> bool:
        """Was the command ignored without an answer?"""
        return self.code is None

    @property
    def rejected(self) -> bool:
        """Did the ledger refuse the request?"""
        return self.code is not None and self.code is not ResultCode.SUCCESS
