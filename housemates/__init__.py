"""
Housemates - Source Package

Tracks who lives in a shared house and who owes whom for shared expenses.

DESIGN PRINCIPLES:
1. The ledger is the only place that knows the rules
2. Debts are always stored net, one direction per pair
3. Nobody leaves the house while money is outstanding
4. Every command gets exactly one answer (or a deliberate silence)
5. Input parsing, output rendering and logging stay outside the ledger
"""

__version__ = "1.0.0"
__author__ = "Housemates Team"
