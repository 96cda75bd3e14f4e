"""
Command Dispatcher

Runs one parsed command against the ledger and renders the answer.

DESIGN DECISION: The ledger speaks in ResultCodes; the outside world
expects the house's own vocabulary (HOUSEFUL, MEMBER_NOT_FOUND, ...).
Translation happens here and only here, so the ledger never formats
anything and the renderer never decides anything.
"""

from housemates.ledger import Ledger
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
from housemates.models.ledger import ResultCode


OUTPUT_TOKENS = {
    ResultCode.SUCCESS: "SUCCESS",
    ResultCode.CAPACITY_EXCEEDED: "HOUSEFUL",
    ResultCode.UNKNOWN_MEMBER: "MEMBER_NOT_FOUND",
    ResultCode.BLOCKED: "FAILURE",
    ResultCode.OVERPAYMENT: "INCORRECT_PAYMENT",
}

# Printed for DUES when there is nobody else to owe
CLEAR_TOKEN = "CLEAR"


class CommandDispatcher:
    """
    Maps each command onto exactly one ledger operation.

    GUARANTEES:
    - One ledger call per command, never more
    - Output lines come only from the ledger's answer
    """

    def __init__(self, ledger: Ledger):
        self._ledger = ledger

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    def dispatch(self, command: Command) -> CommandOutcome:
        """Run `command` and return what should be printed."""
        if isinstance(command, MoveIn):
            return self._move_in(command)
        elif isinstance(command, MoveOut):
            return self._move_out(command)
        elif isinstance(command, Spend):
            return self._spend(command)
        elif isinstance(command, ClearDue):
            return self._clear_due(command)
        elif isinstance(command, Dues):
            return self._dues(command)
        raise TypeError(f"Unsupported command: {command!r}")

    def _move_in(self, command: MoveIn) -> CommandOutcome:
        code = self._ledger.admit(command.member)
        return _coded(CommandName.MOVE_IN, code, command.member)

    def _move_out(self, command: MoveOut) -> CommandOutcome:
        code = self._ledger.remove(command.member)
        return _coded(CommandName.MOVE_OUT, code, command.member)

    def _spend(self, command: Spend) -> CommandOutcome:
        code = self._ledger.record_expense(
            command.amount,
            command.paid_by,
            command.shared_by,
        )
        if code is None:
            return CommandOutcome(command=CommandName.SPEND, member=command.paid_by)
        return _coded(CommandName.SPEND, code, command.paid_by)

    def _clear_due(self, command: ClearDue) -> CommandOutcome:
        result = self._ledger.settle(command.borrower, command.lender, command.amount)
        if isinstance(result, ResultCode):
            return _coded(CommandName.CLEAR_DUE, result, command.borrower)
        return CommandOutcome(
            command=CommandName.CLEAR_DUE,
            code=ResultCode.SUCCESS,
            member=command.borrower,
            output=[result],
        )

    def _dues(self, command: Dues) -> CommandOutcome:
        result = self._ledger.query_balances(command.member)
        if isinstance(result, ResultCode):
            return _coded(CommandName.DUES, result, command.member)
        return CommandOutcome(
            command=CommandName.DUES,
            code=ResultCode.SUCCESS,
            member=command.member,
            output=result or [CLEAR_TOKEN],
        )


def _coded(command: CommandName, code: ResultCode, member: str) -> CommandOutcome:
    return CommandOutcome(
        command=command,
        code=code,
        member=member,
        output=[OUTPUT_TOKENS[code]],
    )
