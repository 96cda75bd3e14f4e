"""
Household Ledger

The only component that knows the house rules:
- who lives here (a bounded roster),
- who owes whom (a netted debt table),
- when someone may leave.

DESIGN DECISION: Every refusal is returned as a ResultCode, never raised.
A refused operation leaves the roster and the debt table exactly as they
were. ValueError is reserved for callers that break the argument contract
(negative amounts), which the command parser already rules out.

The ledger does not log, parse or format. It is a plain object with no
shared state, so every test can build its own.
"""

from decimal import Decimal, localcontext
from typing import Iterable, Optional, Union

from housemates.ledger.debt_table import DebtTable
from housemates.models.ledger import Balance, ResultCode, RoundingMode


DEFAULT_CAPACITY = 3


class Ledger:
    """
    Roster plus debt table for one house.

    Operations:
        admit           -> MOVE_IN
        remove          -> MOVE_OUT
        record_expense  -> SPEND
        settle          -> CLEAR_DUE
        query_balances  -> DUES
    """

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        rounding: RoundingMode = RoundingMode.HALF_UP,
    ):
        """
        Initialize an empty house.

        Args:
            capacity: Maximum number of residents
            rounding: How expense shares are rounded to whole amounts
        """
        if capacity < 1:
            raise ValueError(f"House capacity must be at least 1, got {capacity}")
        self._capacity = capacity
        self._rounding = RoundingMode(rounding)
        self._members: list[str] = []
        self._debts = DebtTable()

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def rounding(self) -> RoundingMode:
        return self._rounding

    @property
    def members(self) -> tuple[str, ...]:
        """Current residents, in the order they moved in."""
        return tuple(self._members)

    def due(self, debtor: str, creditor: str) -> int:
        """Amount `debtor` currently owes `creditor`."""
        return self._debts.get(debtor, creditor)

    def __contains__(self, name: object) -> bool:
        return name in self._members

    def __len__(self) -> int:
        return len(self._members)

    # -------------------------------------------------------------------------
    # Membership
    # -------------------------------------------------------------------------

    def admit(self, name: str) -> ResultCode:
        """
        Move a resident in.

        Re-admitting a current resident is a successful no-op,
        even when the house is full.
        """
        if name in self._members:
            return ResultCode.SUCCESS
        if len(self._members) >= self._capacity:
            return ResultCode.CAPACITY_EXCEEDED

        self._members.append(name)
        return ResultCode.SUCCESS

    def remove(self, name: str) -> ResultCode:
        """
        Move a resident out.

        Only a resident who owes nobody and is owed by nobody may leave.
        """
        if name not in self._members:
            return ResultCode.UNKNOWN_MEMBER
        if self._debts.owes_anyone(name) or self._debts.is_owed_by_anyone(name):
            return ResultCode.BLOCKED

        self._members.remove(name)
        self._debts.purge(name)
        return ResultCode.SUCCESS

    # -------------------------------------------------------------------------
    # Money
    # -------------------------------------------------------------------------

    def record_expense(
        self,
        amount: Union[int, Decimal],
        payer: str,
        participants: Iterable[str],
    ) -> Optional[ResultCode]:
        """
        Split an expense equally and net it against existing debts.

        Args:
            amount: Total spent by `payer`
            payer: Resident who paid
            participants: Everyone sharing the cost (usually includes `payer`)

        Returns:
            SUCCESS or UNKNOWN_MEMBER, or None when there are fewer than two
            residents or fewer than two distinct participants. That case is
            "not applicable yet", not a failure.
        """
        if amount < 0:
            raise ValueError(f"Expense amount cannot be negative, got {amount}")

        sharers = list(dict.fromkeys(participants))
        if len(self._members) < 2 or len(sharers) < 2:
            return None

        if payer not in self._members or any(p not in self._members for p in sharers):
            return ResultCode.UNKNOWN_MEMBER

        share = self._share(amount, len(sharers))

        for participant in sharers:
            if participant == payer:
                continue

            owed_to_payer = self._debts.get(participant, payer)
            payer_owes = self._debts.get(payer, participant)
            net = share - payer_owes

            if net > 0:
                self._debts.set(participant, payer, owed_to_payer + net)
                self._debts.clear(payer, participant)
            else:
                # Also runs for a zero share, which clears whatever
                # the participant owed the payer
                self._debts.set(payer, participant, payer_owes - share)
                self._debts.clear(participant, payer)

        return ResultCode.SUCCESS

    def settle(self, debtor: str, creditor: str, amount: int) -> Union[str, ResultCode]:
        """
        Pay back part or all of what `debtor` owes `creditor`.

        Returns:
            The remaining due as text ("0" when fully cleared),
            UNKNOWN_MEMBER, or OVERPAYMENT.
        """
        if amount < 0:
            raise ValueError(f"Payment amount cannot be negative, got {amount}")

        if debtor not in self._members or creditor not in self._members:
            return ResultCode.UNKNOWN_MEMBER

        due = self._debts.get(debtor, creditor)
        if amount > due:
            return ResultCode.OVERPAYMENT

        remaining = due - amount
        self._debts.set(debtor, creditor, remaining)
        return str(remaining)

    def query_balances(self, name: str) -> Union[list[str], ResultCode]:
        """
        What `name` owes each other resident.

        Every other resident appears exactly once, with 0 when nothing is
        owed. Amounts owed *to* `name` are not listed.

        Returns:
            "<resident> <amount>" lines, largest amount first and then by
            name, or UNKNOWN_MEMBER.
        """
        if name not in self._members:
            return ResultCode.UNKNOWN_MEMBER

        balances = [
            Balance(counterparty=other, amount=self._debts.get(name, other))
            for other in self._members
            if other != name
        ]
        balances.sort(key=lambda balance: balance.sort_key)
        return [str(balance) for balance in balances]

    def _share(self, amount: Union[int, Decimal], count: int) -> int:
        value = Decimal(str(amount))
        with localcontext() as ctx:
            # Keep every integer digit plus the default fractional precision
            ctx.prec = max(ctx.prec, value.adjusted() + ctx.prec + 2)
            quotient = value / Decimal(count)
            rounded = quotient.quantize(Decimal(1), rounding=self._rounding.decimal_rounding)
        return int(rounded)
