"""Mini README: Derived views over the transaction list.

Structure:
    * FilterMode - the user selectable subset criterion (all/income/expense).
    * filter_transactions - predicate view of the list, never mutating it.
    * LedgerSummary - income, expense and balance totals.
    * summarise - linear scan producing a ``LedgerSummary``.

Both helpers are pure and re-evaluated from the full list on every render,
so switching modes can never lose or reorder the underlying data. Totals
always cover the whole ledger regardless of the active filter.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List

from .ledger import Transaction, TransactionType


class FilterMode(str, Enum):
    """Enumerate the filter triggers exposed by the interfaces."""

    ALL = "all"
    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_token(cls, token: object) -> "FilterMode":
        """Parse a UI mode token, defaulting blanks to ``ALL``."""

        if isinstance(token, cls):
            return token
        normalised = str(token or "").strip().lower() or cls.ALL.value
        try:
            return cls(normalised)
        except ValueError as error:
            raise ValueError(f"Unsupported filter mode: {token}") from error

    def matches(self, transaction: Transaction) -> bool:
        """Return ``True`` when the transaction belongs to this view."""

        if self is FilterMode.ALL:
            return True
        return transaction.transaction_type is TransactionType(self.value)


def filter_transactions(
    transactions: Iterable[Transaction], mode: FilterMode = FilterMode.ALL
) -> List[Transaction]:
    """Return the transactions matching ``mode`` in their original order."""

    return [transaction for transaction in transactions if mode.matches(transaction)]


@dataclass(frozen=True, slots=True)
class LedgerSummary:
    """Totals shown in the summary cards."""

    total_income: float
    total_expense: float

    @property
    def balance(self) -> float:
        return self.total_income - self.total_expense

    def as_dict(self) -> Dict[str, float]:
        return {
            "total_income": self.total_income,
            "total_expense": self.total_expense,
            "balance": self.balance,
        }


def summarise(transactions: Iterable[Transaction]) -> LedgerSummary:
    """Sum income and expense amounts across every transaction."""

    total_income = 0.0
    total_expense = 0.0
    for transaction in transactions:
        if transaction.transaction_type is TransactionType.INCOME:
            total_income += transaction.amount
        else:
            total_expense += transaction.amount
    return LedgerSummary(total_income=total_income, total_expense=total_expense)
