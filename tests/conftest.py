"""Mini README: Shared fixtures for the FinX test-suite.

Structure:
    * fixed_today - deterministic "today" for date-stamped transactions.
    * memory_storage - storage adapter backed by an in-memory slot.
    * make_store - factory building stores with injected clock and storage.
    * settings - settings pointing at a temporary data directory.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, Iterator

import pytest

from finx.configuration import FinxSettings, get_settings
from finx.finance import MemoryStore, TransactionStorage, TransactionStore

FIXED_TODAY = date(2024, 5, 15)


@pytest.fixture
def fixed_today() -> date:
    return FIXED_TODAY


@pytest.fixture
def memory_storage() -> TransactionStorage:
    return TransactionStorage(MemoryStore())


@pytest.fixture
def make_store(memory_storage: TransactionStorage) -> Callable[..., TransactionStore]:
    """Return a factory producing stores dated ``FIXED_TODAY`` by default."""

    def factory(**kwargs: object) -> TransactionStore:
        kwargs.setdefault("today", lambda: FIXED_TODAY)
        storage = kwargs.pop("storage", memory_storage)
        return TransactionStore(storage, **kwargs)  # type: ignore[arg-type]

    return factory


@pytest.fixture
def settings(tmp_path) -> FinxSettings:
    return FinxSettings(data_directory=tmp_path)


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
