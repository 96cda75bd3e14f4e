"""
Command Parser

Turns one input line into one typed command.

A line is split on whitespace. The first token names the command,
the rest are its arguments:

    MOVE_IN   NAME
    MOVE_OUT  NAME
    SPEND     AMOUNT PAID_BY [MEMBER ...]
    DUES      NAME
    CLEAR_DUE BORROWER LENDER AMOUNT

Blank lines parse to None. Anything else either becomes a command
or raises a CommandError saying why it could not.

IMPORTANT: The parser checks shape, never house rules. Whether a name
belongs to a resident, or a payment is too large, is the ledger's call.
"""

from typing import Optional

from pydantic import ValidationError

from housemates.models.command import (
    ClearDue,
    Command,
    CommandName,
    Dues,
    MoveIn,
    MoveOut,
    Spend,
)


class CommandError(Exception):
    """Base exception for lines that cannot become commands."""

    def __init__(self, command: str, message: str):
        self.command = command
        super().__init__(message)


class UnknownCommandError(CommandError):
    """The first token is not a command keyword."""

    def __init__(self, command: str):
        super().__init__(command, f"Unknown command: {command}")


class CommandArgumentError(CommandError):
    """A known command with missing or malformed arguments."""

    def __init__(self, command: str, reason: str):
        self.reason = reason
        super().__init__(command, f"Invalid arguments for {command}: {reason}")


class CommandParser:
    """Stateless; one instance can parse any number of lines."""

    def parse(self, line: str) -> Optional[Command]:
        """
        Parse a single line.

        Returns:
            The command, or None for a blank line

        Raises:
            UnknownCommandError: If the keyword is not recognised
            CommandArgumentError: If the arguments don't fit the command
        """
        tokens = line.split()
        if not tokens:
            return None

        keyword, args = tokens[0], tokens[1:]
        try:
            name = CommandName(keyword)
        except ValueError:
            raise UnknownCommandError(keyword) from None

        try:
            return self._build(name, args)
        except ValidationError as e:
            raise CommandArgumentError(keyword, _summarize(e)) from e

    def _build(self, name: CommandName, args: list[str]) -> Command:
        if name is CommandName.MOVE_IN:
            self._require(name, args, "NAME")
            return MoveIn(member=args[0])

        if name is CommandName.MOVE_OUT:
            self._require(name, args, "NAME")
            return MoveOut(member=args[0])

        if name is CommandName.DUES:
            self._require(name, args, "NAME")
            return Dues(member=args[0])

        if name is CommandName.SPEND:
            self._require(name, args, "AMOUNT", "PAID_BY")
            # The payer always shares the cost
            return Spend(amount=args[0], paid_by=args[1], shared_by=args[1:])

        self._require(name, args, "BORROWER", "LENDER", "AMOUNT")
        return ClearDue(borrower=args[0], lender=args[1], amount=args[2])

    @staticmethod
    def _require(name: CommandName, args: list[str], *fields: str) -> None:
        if len(args) < len(fields):
            missing = ", ".join(fields[len(args):])
            raise CommandArgumentError(name.value, f"missing {missing}")


def _summarize(error: ValidationError) -> str:
    """One-line description of a model validation failure."""
    parts = []
    for err in error.errors():
        field = ".".join(str(part) for part in err["loc"])
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts)
