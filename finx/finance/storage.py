"""Mini README: Durable key-value slot and the transaction list serializer.

Structure:
    * KeyValueStore - abstract string key/value pair mirroring browser storage.
    * MemoryStore - process-local implementation for tests and dry runs.
    * JsonFileStore - one JSON object on disk, rewritten on every write.
    * TransactionStorage - loads and saves the whole transaction list.

Loading is deliberately forgiving: an absent key, invalid JSON, or a record
that fails validation all yield an empty list. The condition is logged but
never raised, so callers cannot tell "empty" from "corrupt". Saving always
overwrites the full payload; there is no schema version and no migration.
"""

from __future__ import annotations

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..logging_utils import get_logger
from .ledger import Transaction

LOGGER = get_logger(__name__)

DEFAULT_STORAGE_KEY = "finx_transactions"


class KeyValueStore(ABC):
    """Base interface for durable string slots."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored string or ``None`` when the key is absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Forget ``key``; absent keys are ignored."""


class MemoryStore(KeyValueStore):
    """Keep slots in a dictionary for the lifetime of the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStore(KeyValueStore):
    """Persist slots as a single JSON object file.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a crash mid-write leaves the previous file intact. A file
    that cannot be read as a JSON object behaves like an empty store.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as error:
            LOGGER.warning("Ignoring unreadable key-value file %s: %s", self.path, error)
            return {}
        if not isinstance(data, dict):
            LOGGER.warning("Ignoring key-value file %s: top level is not an object", self.path)
            return {}
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def _write_all(self, items: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        descriptor, temp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(descriptor, "w", encoding="utf-8") as handle:
                json.dump(items, handle, indent=2, sort_keys=True)
            os.replace(temp_name, self.path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if items.pop(key, None) is not None:
            self._write_all(items)


class TransactionStorage:
    """Serialise the transaction list into one key of a ``KeyValueStore``."""

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.store = store
        self.key = key

    def load(self) -> List[Transaction]:
        """Return the persisted transactions, or an empty list on absence or corruption."""

        payload = self.store.get_item(self.key)
        if payload is None:
            LOGGER.debug("No persisted transactions under key '%s'", self.key)
            return []
        try:
            records = json.loads(payload)
            if not isinstance(records, list):
                raise ValueError("payload is not a list")
            transactions = [Transaction.from_dict(record) for record in records]
            identifiers = {transaction.transaction_id for transaction in transactions}
            if len(identifiers) != len(transactions):
                raise ValueError("payload contains duplicate ids")
        except (ValueError, TypeError) as error:
            # json.JSONDecodeError is a ValueError subclass.
            LOGGER.warning("Discarding unreadable payload under key '%s': %s", self.key, error)
            return []
        LOGGER.debug("Loaded %s transactions from key '%s'", len(transactions), self.key)
        return transactions

    def save(self, transactions: Iterable[Transaction]) -> None:
        """Overwrite the persisted payload with ``transactions``."""

        records = [transaction.as_dict() for transaction in transactions]
        self.store.set_item(self.key, json.dumps(records))
        LOGGER.debug("Persisted %s transactions under key '%s'", len(records), self.key)
