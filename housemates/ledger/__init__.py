"""Ledger package."""

from housemates.ledger.debt_table import DebtTable
from housemates.ledger.ledger import DEFAULT_CAPACITY, Ledger

__all__ = ["DEFAULT_CAPACITY", "DebtTable", "Ledger"]
