"""Mini README: Tests for the filter modes and summary totals.

The filter must partition the ledger into disjoint income and expense
views that together equal the full view, and totals must ignore the
active filter and stay stable between calls.
"""

from __future__ import annotations

from datetime import date

import pytest

from finx.finance import FilterMode, Transaction, TransactionType, filter_transactions, summarise


def _mixed_ledger():
    kinds = [
        TransactionType.EXPENSE,
        TransactionType.INCOME,
        TransactionType.INCOME,
        TransactionType.EXPENSE,
        TransactionType.INCOME,
    ]
    return [
        Transaction(index, kind, 10.0 * (index + 1), f"cat{index}", "-", date(2024, 5, index + 1))
        for index, kind in enumerate(kinds)
    ]


def test_expense_filter_returns_only_expenses() -> None:
    ledger = _mixed_ledger()

    expenses = filter_transactions(ledger, FilterMode.EXPENSE)

    assert [transaction.transaction_id for transaction in expenses] == [0, 3]


def test_income_and_expense_views_partition_all() -> None:
    ledger = _mixed_ledger()

    income = filter_transactions(ledger, FilterMode.INCOME)
    expense = filter_transactions(ledger, FilterMode.EXPENSE)
    everything = filter_transactions(ledger, FilterMode.ALL)

    income_ids = {transaction.transaction_id for transaction in income}
    expense_ids = {transaction.transaction_id for transaction in expense}
    assert income_ids.isdisjoint(expense_ids)
    assert income_ids | expense_ids == {transaction.transaction_id for transaction in everything}
    assert everything == ledger


def test_filter_does_not_mutate_input() -> None:
    ledger = _mixed_ledger()
    original = list(ledger)

    filter_transactions(ledger, FilterMode.INCOME)

    assert ledger == original


@pytest.mark.parametrize(
    ("token", "expected"),
    [("all", FilterMode.ALL), ("Income", FilterMode.INCOME), (" expense ", FilterMode.EXPENSE), ("", FilterMode.ALL), (None, FilterMode.ALL)],
)
def test_filter_mode_from_token(token, expected) -> None:
    assert FilterMode.from_token(token) is expected


def test_filter_mode_rejects_unknown_token() -> None:
    with pytest.raises(ValueError):
        FilterMode.from_token("transfers")


def test_summary_covers_whole_ledger_and_is_idempotent() -> None:
    ledger = _mixed_ledger()

    first = summarise(ledger)
    second = summarise(ledger)

    assert first == second
    assert first.total_income == pytest.approx(20.0 + 30.0 + 50.0)
    assert first.total_expense == pytest.approx(10.0 + 40.0)
    assert first.balance == pytest.approx(50.0)
    assert first.as_dict()["balance"] == pytest.approx(50.0)


def test_summary_of_empty_ledger_is_zero() -> None:
    summary = summarise([])
    assert (summary.total_income, summary.total_expense, summary.balance) == (0.0, 0.0, 0.0)
