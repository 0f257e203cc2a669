"""Mini README: Ledger core for FinX.

This package holds everything that does not depend on a display: the
transaction store, the storage adapter for the durable key-value slot, the
derived views (filter and summary totals), and the category chart
projection. Interfaces in ``finx.interface`` combine these into the render
pipeline.
"""

from .charts import (
    CategoryChart,
    ChartProjector,
    ChartSurface,
    TemplateChartSurface,
    TextChartSurface,
    group_by_category,
)
from .ledger import Transaction, TransactionStore, TransactionType, parse_amount
from .storage import JsonFileStore, KeyValueStore, MemoryStore, TransactionStorage
from .views import FilterMode, LedgerSummary, filter_transactions, summarise

__all__ = [
    "CategoryChart",
    "ChartProjector",
    "ChartSurface",
    "FilterMode",
    "JsonFileStore",
    "KeyValueStore",
    "LedgerSummary",
    "MemoryStore",
    "TemplateChartSurface",
    "TextChartSurface",
    "Transaction",
    "TransactionStorage",
    "TransactionStore",
    "TransactionType",
    "filter_transactions",
    "group_by_category",
    "parse_amount",
    "summarise",
]
