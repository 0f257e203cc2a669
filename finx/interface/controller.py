"""Mini README: Ledger controller tying the store to its views.

Structure:
    * LedgerController - owns the store, the active filter mode, the
      presenter, and the chart projector.
    * build_controller - wires a controller from ``FinxSettings``.

Every user action goes through the controller. Mutations are delegated to
the ``TransactionStore`` which persists and then notifies the controller;
``refresh`` recomputes the filtered rows, the totals and the chart from the
full list. Nothing is diffed: each action re-renders everything.
"""

from __future__ import annotations

from typing import Optional

from ..configuration import FinxSettings
from ..finance.charts import ChartProjector, ChartSurface
from ..finance.ledger import Confirm, Transaction, TransactionStore
from ..finance.storage import JsonFileStore, TransactionStorage
from ..finance.views import FilterMode
from ..logging_utils import get_logger
from .presenter import LedgerDisplay, LedgerPresenter

LOGGER = get_logger(__name__)


class LedgerController:
    """Route user actions and re-run the render pipeline after each one."""

    def __init__(
        self,
        store: TransactionStore,
        *,
        presenter: Optional[LedgerPresenter] = None,
        chart_projector: Optional[ChartProjector] = None,
        mode: FilterMode = FilterMode.ALL,
    ) -> None:
        self.store = store
        self.presenter = presenter or LedgerPresenter()
        self.chart_projector = chart_projector or ChartProjector()
        self.mode = mode
        self.display = LedgerDisplay()
        self.store.subscribe(lambda _store: self.refresh())
        self.refresh()

    def refresh(self) -> LedgerDisplay:
        """Recompute filter, totals, rows and chart from the full store."""

        transactions = self.store.list_transactions()
        self.presenter.render(transactions, self.mode, self.display)
        self.chart_projector.project(transactions)
        return self.display

    def view(self, mode: object) -> LedgerDisplay:
        """Render ``mode`` into a fresh display without changing the active mode."""

        display = LedgerDisplay()
        self.presenter.render(self.store.list_transactions(), FilterMode.from_token(mode), display)
        return display

    def submit(
        self,
        kind: object,
        amount: object,
        category: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Transaction:
        """Add a transaction; validation errors propagate untouched."""

        return self.store.add(kind, amount, category, description)

    def remove(self, transaction_id: int) -> bool:
        return self.store.remove(transaction_id)

    def clear(self, confirm: Confirm) -> bool:
        return self.store.clear(confirm)

    def set_filter(self, mode: object) -> LedgerDisplay:
        """Switch the active filter mode and re-render."""

        self.mode = FilterMode.from_token(mode)
        LOGGER.debug("Filter mode set to %s", self.mode.value)
        return self.refresh()


def build_storage(settings: FinxSettings) -> TransactionStorage:
    """Return the storage adapter backed by the configured ledger file."""

    return TransactionStorage(JsonFileStore(settings.ledger_path), key=settings.storage_key)


def build_controller(
    settings: FinxSettings,
    *,
    storage: Optional[TransactionStorage] = None,
    chart_surface: Optional[ChartSurface] = None,
) -> LedgerController:
    """Create a controller whose store is loaded from ``storage``."""

    storage = storage or build_storage(settings)
    store = TransactionStore(storage, placeholder=settings.placeholder_text)
    LOGGER.info("Ledger loaded with %s transactions", len(store))
    return LedgerController(
        store,
        presenter=LedgerPresenter(currency_symbol=settings.currency_symbol),
        chart_projector=ChartProjector(chart_surface),
    )
