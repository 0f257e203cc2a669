"""Mini README: Category chart projection for the ledger.

Structure:
    * CategoryChart - labels/values pair plus the visual type to draw.
    * group_by_category - per-category sums in first-seen order.
    * ChartSurface - abstract mounting point for a rendered chart.
    * TemplateChartSurface - keeps the chart for the HTML dashboard.
    * TextChartSurface - renders horizontal bars for the command line.
    * ChartProjector - replaces the mounted chart after each render.

Grouping covers the whole ledger, not the filtered view, and adds income and
expense amounts of the same category together instead of netting them. A
missing or unavailable surface simply means no chart is drawn.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from ..logging_utils import get_logger
from .ledger import Transaction

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class CategoryChart:
    """Chart payload handed to a surface."""

    labels: List[str]
    values: List[float]
    chart_type: str = "doughnut"
    destroyed: bool = field(default=False, compare=False)

    def destroy(self) -> None:
        """Mark the chart instance as torn down."""

        self.destroyed = True

    def as_dict(self) -> Dict[str, object]:
        return {"type": self.chart_type, "labels": list(self.labels), "values": list(self.values)}


def group_by_category(transactions: Iterable[Transaction]) -> Tuple[List[str], List[float]]:
    """Return distinct categories in first-seen order with their summed amounts."""

    totals: Dict[str, float] = {}
    for transaction in transactions:
        totals[transaction.category] = totals.get(transaction.category, 0.0) + transaction.amount
    return list(totals.keys()), list(totals.values())


class ChartSurface(ABC):
    """Base interface for places a chart can be mounted."""

    @property
    def available(self) -> bool:
        """Whether the surface can currently display a chart."""

        return True

    @abstractmethod
    def mount(self, chart: CategoryChart) -> None:
        """Display ``chart``."""

    @abstractmethod
    def unmount(self, chart: CategoryChart) -> None:
        """Remove ``chart`` from the surface."""


class TemplateChartSurface(ChartSurface):
    """Hold the mounted chart so the dashboard template can serialise it."""

    def __init__(self, script_url: Optional[str]) -> None:
        self.script_url = script_url
        self.current: Optional[CategoryChart] = None

    @property
    def available(self) -> bool:
        return bool(self.script_url)

    def mount(self, chart: CategoryChart) -> None:
        self.current = chart

    def unmount(self, chart: CategoryChart) -> None:
        if self.current is chart:
            self.current = None


class TextChartSurface(ChartSurface):
    """Render the chart as proportional text bars."""

    def __init__(self, width: int = 30, bar_character: str = "#") -> None:
        self.width = width
        self.bar_character = bar_character
        self.lines: List[str] = []

    def mount(self, chart: CategoryChart) -> None:
        largest = max(chart.values, default=0.0)
        label_width = max((len(label) for label in chart.labels), default=0)
        self.lines = []
        for label, value in zip(chart.labels, chart.values):
            length = int(round(self.width * value / largest)) if largest else 0
            self.lines.append(
                f"{label.ljust(label_width)} | {self.bar_character * length} {value:.2f}"
            )

    def unmount(self, chart: CategoryChart) -> None:
        self.lines = []

    def render(self) -> str:
        return "\n".join(self.lines)


class ChartProjector:
    """Feed category totals to a surface, replacing the previous chart."""

    def __init__(self, surface: Optional[ChartSurface] = None) -> None:
        self.surface = surface
        self._current: Optional[CategoryChart] = None

    @property
    def current(self) -> Optional[CategoryChart]:
        return self._current

    def project(self, transactions: Iterable[Transaction]) -> Optional[CategoryChart]:
        """Rebuild the chart from the full ledger, or skip when no surface is usable."""

        if self.surface is None or not self.surface.available:
            LOGGER.debug("Chart surface unavailable; skipping category chart")
            return None
        if self._current is not None:
            self.surface.unmount(self._current)
            self._current.destroy()
        labels, values = group_by_category(transactions)
        chart = CategoryChart(labels=labels, values=values)
        self.surface.mount(chart)
        self._current = chart
        LOGGER.debug("Projected category chart with %s categories", len(labels))
        return chart
