"""Mini README: In-memory transaction store for the personal ledger.

Structure:
    * TransactionType - enum representing income versus expense entries.
    * Transaction - immutable dataclass storing one ledger entry.
    * parse_amount - validates user supplied amounts.
    * TransactionStore - single source of truth for the transaction list.

The store keeps records in insertion order and owns every mutation. After a
mutation completes in memory it overwrites the durable copy through the
attached ``TransactionStorage`` and then notifies subscribed listeners, which
is how the dashboard and command line re-run their render pipeline. Records
are never edited in place: they are created by ``add`` and destroyed by
``remove`` or ``clear``.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Iterable, Iterator, List, Optional

from ..errors import InvalidAmountError, InvalidTransactionTypeError
from ..logging_utils import get_logger

if TYPE_CHECKING:
    from .storage import TransactionStorage

LOGGER = get_logger(__name__)

DEFAULT_PLACEHOLDER = "-"
CLEAR_PROMPT = "Clear all transactions?"

ChangeListener = Callable[["TransactionStore"], None]
Confirm = Callable[[str], bool]


class TransactionType(str, Enum):
    """Enumerate the supported transaction kinds."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_str(cls, value: object) -> "TransactionType":
        """Coerce arbitrary casing into a valid transaction type."""

        if isinstance(value, cls):
            return value
        try:
            normalised = str(value).strip().lower()
            return cls(normalised)
        except ValueError as error:
            raise InvalidTransactionTypeError(
                f"Unsupported transaction type: {value}"
            ) from error

    @property
    def sign(self) -> str:
        """Leading sign used when displaying amounts of this kind."""

        return "+" if self is TransactionType.INCOME else "-"


@dataclass(frozen=True, slots=True)
class Transaction:
    """Represent a single income or expense entry."""

    transaction_id: int
    transaction_type: TransactionType
    amount: float
    category: str
    description: str
    occurred_on: date

    @property
    def signed_amount(self) -> float:
        """Amount as it contributes to the balance."""

        if self.transaction_type is TransactionType.INCOME:
            return self.amount
        return -self.amount

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction in its persisted record shape."""

        return {
            "id": self.transaction_id,
            "kind": self.transaction_type.value,
            "amount": self.amount,
            "category": self.category,
            "description": self.description,
            "date": self.occurred_on.isoformat(),
        }

    @classmethod
    def from_dict(cls, record: Dict[str, object]) -> "Transaction":
        """Rebuild a transaction from its persisted record.

        Raises ``ValueError`` (or one of its subclasses) when a field is
        missing or malformed so the storage layer can treat the payload as
        corrupt.
        """

        if not isinstance(record, dict):
            raise ValueError(f"Transaction records must be objects, got {type(record).__name__}")
        try:
            raw_id = record["id"]
            if isinstance(raw_id, bool) or not isinstance(raw_id, (int, str)):
                raise ValueError(f"Unsupported transaction id: {raw_id!r}")
            return cls(
                transaction_id=int(raw_id),
                transaction_type=TransactionType.from_str(record["kind"]),
                amount=parse_amount(record["amount"]),
                category=str(record["category"]),
                description=str(record["description"]),
                occurred_on=date.fromisoformat(str(record["date"])),
            )
        except KeyError as error:
            raise ValueError(f"Transaction record is missing field {error}") from error


def parse_amount(value: object) -> float:
    """Return ``value`` as a positive finite float or raise ``InvalidAmountError``."""

    if value is None or isinstance(value, bool):
        raise InvalidAmountError()
    try:
        amount = float(value.strip() if isinstance(value, str) else value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as error:
        raise InvalidAmountError() from error
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidAmountError()
    return amount


def _clean_text(value: Optional[str], placeholder: str) -> str:
    """Strip free text and fall back to the placeholder when blank."""

    cleaned = (value or "").strip()
    return cleaned or placeholder


class TransactionStore:
    """Own the ordered transaction list and route every mutation."""

    def __init__(
        self,
        storage: Optional["TransactionStorage"] = None,
        *,
        transactions: Optional[Iterable[Transaction]] = None,
        placeholder: str = DEFAULT_PLACEHOLDER,
        today: Callable[[], date] = date.today,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._storage = storage
        self._placeholder = placeholder
        self._today = today
        self._clock = clock
        self._transactions: List[Transaction] = []
        self._listeners: List[ChangeListener] = []
        if transactions is None:
            transactions = storage.load() if storage is not None else []
        for transaction in transactions:
            self._register(transaction)
        LOGGER.debug("Transaction store initialised with %s transactions", len(self._transactions))

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(list(self._transactions))

    def _register(self, transaction: Transaction) -> None:
        """Append a transaction ensuring identifiers remain unique."""

        if any(existing.transaction_id == transaction.transaction_id for existing in self._transactions):
            raise ValueError(f"Transaction {transaction.transaction_id} already exists.")
        self._transactions.append(transaction)

    def _next_id(self) -> int:
        """Millisecond timestamp, bumped past existing ids on collision."""

        candidate = int(self._clock() * 1000)
        existing = {transaction.transaction_id for transaction in self._transactions}
        if candidate in existing:
            candidate = max(existing) + 1
        return candidate

    def subscribe(self, listener: ChangeListener) -> None:
        """Register a callback invoked after every mutation has been persisted."""

        self._listeners.append(listener)

    def _commit(self) -> None:
        """Overwrite the durable copy, then notify listeners."""

        if self._storage is not None:
            self._storage.save(self._transactions)
        for listener in list(self._listeners):
            listener(self)

    def list_transactions(self) -> List[Transaction]:
        """Return a copy of the transactions in insertion order."""

        return list(self._transactions)

    def get_transaction(self, transaction_id: int) -> Transaction:
        """Retrieve a transaction, raising informative errors when missing."""

        for transaction in self._transactions:
            if transaction.transaction_id == transaction_id:
                return transaction
        raise KeyError(f"Transaction {transaction_id} not found")

    def add(
        self,
        kind: object,
        amount: object,
        category: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Transaction:
        """Validate and append a new transaction dated today."""

        transaction_type = TransactionType.from_str(kind)
        validated_amount = parse_amount(amount)
        transaction = Transaction(
            transaction_id=self._next_id(),
            transaction_type=transaction_type,
            amount=validated_amount,
            category=_clean_text(category, self._placeholder),
            description=_clean_text(description, self._placeholder),
            occurred_on=self._today(),
        )
        self._register(transaction)
        LOGGER.info(
            "Added %s transaction %s for %.2f (%s)",
            transaction_type.value,
            transaction.transaction_id,
            validated_amount,
            transaction.category,
        )
        self._commit()
        return transaction

    def remove(self, transaction_id: int) -> bool:
        """Delete the matching transaction; unknown ids are a no-op."""

        remaining = [t for t in self._transactions if t.transaction_id != transaction_id]
        removed = len(remaining) != len(self._transactions)
        self._transactions = remaining
        if removed:
            LOGGER.info("Removed transaction %s", transaction_id)
        else:
            LOGGER.debug("Remove requested for unknown transaction %s", transaction_id)
        self._commit()
        return removed

    def clear(self, confirm: Confirm) -> bool:
        """Delete every transaction once ``confirm`` approves the prompt."""

        if not self._transactions:
            return False
        if not confirm(CLEAR_PROMPT):
            LOGGER.debug("Clear declined; keeping %s transactions", len(self._transactions))
            return False
        count = len(self._transactions)
        self._transactions = []
        LOGGER.info("Cleared %s transactions", count)
        self._commit()
        return True
