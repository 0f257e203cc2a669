"""Mini README: Tests covering the transaction store.

Structure:
    * validation - non-positive or non-numeric amounts leave the store untouched.
    * balance - every valid addition moves the balance by its signed amount.
    * removal and clearing - unknown ids are ignored, clearing needs confirmation.
    * persistence - every mutation overwrites the durable payload.
"""

from __future__ import annotations

import json
from datetime import date

import pytest

from finx.errors import InvalidAmountError, InvalidTransactionTypeError
from finx.finance import (
    Transaction,
    TransactionStorage,
    TransactionStore,
    TransactionType,
    parse_amount,
    summarise,
)


def test_add_records_income_and_expense(make_store) -> None:
    """Two entries should produce the totals shown in the summary cards."""

    store = make_store()
    store.add("income", 100, "Salary", "May")
    store.add("expense", 40, "Food", "Lunch")

    summary = summarise(store)
    assert summary.total_income == pytest.approx(100.0)
    assert summary.total_expense == pytest.approx(40.0)
    assert summary.balance == pytest.approx(60.0)


@pytest.mark.parametrize(
    ("kind", "amount"),
    [
        ("income", 250.0),
        ("expense", 12.5),
        ("INCOME", "3.75"),
        (TransactionType.EXPENSE, 0.01),
    ],
)
def test_balance_moves_by_signed_amount(make_store, kind, amount) -> None:
    """Post-add balance equals pre-add balance plus the signed amount."""

    store = make_store()
    store.add("income", 500, "Salary", "")
    store.add("expense", 120, "Rent", "")
    before = summarise(store).balance

    transaction = store.add(kind, amount, "Misc", "")

    expected = float(amount) if transaction.transaction_type is TransactionType.INCOME else -float(amount)
    assert summarise(store).balance == pytest.approx(before + expected)


@pytest.mark.parametrize("amount", [0, -5, "0", "", "abc", None, "nan", "inf", True])
def test_add_rejects_invalid_amounts(make_store, memory_storage, amount) -> None:
    """Invalid amounts raise and leave the store and payload unchanged."""

    store = make_store()
    store.add("income", 10, "Gift", "")
    snapshot = store.list_transactions()
    payload = memory_storage.store.get_item(memory_storage.key)

    with pytest.raises(InvalidAmountError, match="Enter a valid amount."):
        store.add("expense", amount, "Food", "")

    assert store.list_transactions() == snapshot
    assert memory_storage.store.get_item(memory_storage.key) == payload


def test_zero_amount_on_empty_store_keeps_it_empty(make_store) -> None:
    store = make_store()
    with pytest.raises(InvalidAmountError):
        store.add("expense", 0, "Food", "Lunch")
    assert len(store) == 0


def test_add_rejects_unknown_kind(make_store) -> None:
    store = make_store()
    with pytest.raises(InvalidTransactionTypeError):
        store.add("transfer", 10, "", "")
    assert len(store) == 0


def test_add_applies_placeholders_and_today(make_store, fixed_today) -> None:
    """Blank text fields fall back to the placeholder and the date is today."""

    store = make_store()
    transaction = store.add("expense", "9.99", "   ", None)

    assert transaction.category == "-"
    assert transaction.description == "-"
    assert transaction.occurred_on == fixed_today
    assert transaction.amount == pytest.approx(9.99)


def test_add_generates_unique_ids_for_same_millisecond(make_store) -> None:
    """A frozen clock must not produce duplicate identifiers."""

    store = make_store(clock=lambda: 1_700_000_000.0)
    first = store.add("income", 1, "", "")
    second = store.add("income", 2, "", "")
    third = store.add("income", 3, "", "")

    assert first.transaction_id == 1_700_000_000_000
    assert len({first.transaction_id, second.transaction_id, third.transaction_id}) == 3


def test_remove_first_of_two_keeps_second(make_store) -> None:
    store = make_store()
    first = store.add("income", 100, "Salary", "May")
    second = store.add("expense", 40, "Food", "Lunch")

    assert store.remove(first.transaction_id) is True
    assert store.list_transactions() == [second]


def test_remove_unknown_id_is_noop(make_store) -> None:
    store = make_store()
    store.add("income", 100, "Salary", "May")
    snapshot = store.list_transactions()

    assert store.remove(123) is False
    assert store.list_transactions() == snapshot


def test_clear_requires_confirmation(make_store, memory_storage) -> None:
    """Declining keeps every record; confirming empties the store and payload."""

    store = make_store()
    store.add("income", 100, "Salary", "")
    store.add("income", 50, "Bonus", "")
    prompts = []

    assert store.clear(lambda message: prompts.append(message) or False) is False
    assert len(store) == 2
    assert prompts == ["Clear all transactions?"]

    assert store.clear(lambda message: True) is True
    assert len(store) == 0
    assert json.loads(memory_storage.store.get_item(memory_storage.key)) == []


def test_clear_on_empty_store_does_not_prompt(make_store) -> None:
    store = make_store()

    def confirm(message: str) -> bool:
        raise AssertionError("prompt should not be shown")

    assert store.clear(confirm) is False


def test_mutations_persist_before_listeners_run(make_store, memory_storage) -> None:
    """Listeners observe a payload that already reflects the mutation."""

    store = make_store()
    seen = []
    store.subscribe(
        lambda current: seen.append(
            (len(current), len(json.loads(memory_storage.store.get_item(memory_storage.key))))
        )
    )

    added = store.add("income", 5, "Gift", "")
    store.remove(added.transaction_id)

    assert seen == [(1, 1), (0, 0)]


def test_store_loads_from_storage(memory_storage) -> None:
    existing = Transaction(
        transaction_id=42,
        transaction_type=TransactionType.EXPENSE,
        amount=12.0,
        category="Food",
        description="Dinner",
        occurred_on=date(2024, 4, 1),
    )
    memory_storage.save([existing])

    store = TransactionStore(memory_storage)

    assert store.get_transaction(42) == existing
    with pytest.raises(KeyError):
        store.get_transaction(7)


def test_store_rejects_duplicate_initial_ids() -> None:
    record = Transaction(1, TransactionType.INCOME, 1.0, "-", "-", date(2024, 1, 1))
    with pytest.raises(ValueError):
        TransactionStore(transactions=[record, record])


def test_parse_amount_accepts_numeric_strings() -> None:
    assert parse_amount(" 12.50 ") == pytest.approx(12.5)
    assert parse_amount(7) == pytest.approx(7.0)


def test_transaction_type_from_str_normalises_case() -> None:
    assert TransactionType.from_str(" Expense ") is TransactionType.EXPENSE
    assert TransactionType.INCOME.sign == "+"
    assert TransactionType.EXPENSE.sign == "-"


def test_store_without_storage_still_notifies() -> None:
    """A store without storage still mutates and notifies."""

    store = TransactionStore(today=lambda: date(2024, 1, 2))
    notified = []
    store.subscribe(notified.append)
    store.add("income", 1, "", "")
    assert notified == [store]
    assert isinstance(store.list_transactions()[0], Transaction)


def test_storage_is_overwritten_not_appended(memory_storage: TransactionStorage, make_store) -> None:
    store = make_store()
    first = store.add("income", 1, "A", "")
    store.add("income", 2, "B", "")
    store.remove(first.transaction_id)

    records = json.loads(memory_storage.store.get_item(memory_storage.key))
    assert [record["category"] for record in records] == ["B"]
