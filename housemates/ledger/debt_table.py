"""
Debt Table

Sparse mapping of (debtor, creditor) -> amount owed.

INVARIANTS:
- Stored amounts are always positive; a missing key means zero.
- Writing zero deletes the entry instead of storing it.

The table does not enforce the one-direction-per-pair rule on its own.
The ledger's netting keeps that rule; the table just makes "zero" unambiguous.
"""

from typing import Iterator


class DebtTable:
    """Owned by a single Ledger. Never handed out to callers."""

    def __init__(self) -> None:
        self._entries: dict[tuple[str, str], int] = {}

    def get(self, debtor: str, creditor: str) -> int:
        """Amount `debtor` owes `creditor` (0 when nothing is recorded)."""
        return self._entries.get((debtor, creditor), 0)

    def set(self, debtor: str, creditor: str, amount: int) -> None:
        """
        Record what `debtor` owes `creditor`.

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(
                f"Debt cannot be negative: {debtor} -> {creditor} = {amount}"
            )
        if amount == 0:
            self._entries.pop((debtor, creditor), None)
        else:
            self._entries[(debtor, creditor)] = amount

    def clear(self, debtor: str, creditor: str) -> None:
        """Forget any debt in this direction."""
        self._entries.pop((debtor, creditor), None)

    def owes_anyone(self, name: str) -> bool:
        return any(debtor == name for debtor, _ in self._entries)

    def is_owed_by_anyone(self, name: str) -> bool:
        return any(creditor == name for _, creditor in self._entries)

    def purge(self, name: str) -> None:
        """Drop every entry where `name` is debtor or creditor."""
        for key in [key for key in self._entries if name in key]:
            del self._entries[key]

    def __iter__(self) -> Iterator[tuple[str, str, int]]:
        for (debtor, creditor), amount in self._entries.items():
            yield debtor, creditor, amount

    def __len__(self) -> int:
        return len(self._entries)
