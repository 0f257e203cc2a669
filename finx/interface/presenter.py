"""Mini README: Presentation of the ledger into display slots.

Structure:
    * format_money - fixed currency prefix with two decimals.
    * PresentedRow - one table row ready for display.
    * LedgerDisplay - the slots a surface reads (rows, empty state, totals).
    * LedgerPresenter - fills a ``LedgerDisplay`` from the store.
    * render_text_table - plain-text rendition of a display for the CLI.

The presenter writes into the display object and returns nothing, which
keeps the HTML dashboard and the command line on the same code path: both
hand over a display, then read whatever the presenter left in it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from ..finance.ledger import Transaction
from ..finance.views import FilterMode, LedgerSummary, filter_transactions, summarise
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

EMPTY_STATE_MESSAGE = "No transactions yet."
TABLE_HEADERS = ("Date", "Type", "Category", "Description", "Amount", "ID")


def format_money(value: float, symbol: str = "$") -> str:
    """Format ``value`` with the currency symbol and exactly two decimals."""

    return f"{symbol}{value:.2f}"


@dataclass(frozen=True, slots=True)
class PresentedRow:
    """Display-ready representation of a transaction."""

    transaction_id: int
    date: str
    kind: str
    category: str
    description: str
    amount_text: str

    @property
    def badge_class(self) -> str:
        return f"badge-{self.kind}"


@dataclass(slots=True)
class LedgerDisplay:
    """Slots written by ``LedgerPresenter.render``."""

    rows: List[PresentedRow] = field(default_factory=list)
    empty_state_visible: bool = True
    income_text: str = ""
    expense_text: str = ""
    balance_text: str = ""
    summary: LedgerSummary = field(
        default_factory=lambda: LedgerSummary(total_income=0.0, total_expense=0.0)
    )
    mode: FilterMode = FilterMode.ALL


class LedgerPresenter:
    """Render filtered, date-sorted rows and summary totals."""

    def __init__(self, currency_symbol: str = "$") -> None:
        self.currency_symbol = currency_symbol

    def money(self, value: float) -> str:
        return format_money(value, self.currency_symbol)

    def present_row(self, transaction: Transaction) -> PresentedRow:
        """Build the row for a single transaction."""

        return PresentedRow(
            transaction_id=transaction.transaction_id,
            date=transaction.occurred_on.isoformat(),
            kind=transaction.transaction_type.value,
            category=transaction.category,
            description=transaction.description,
            amount_text=f"{transaction.transaction_type.sign}{self.money(transaction.amount)}",
        )

    def render(
        self,
        transactions: Sequence[Transaction],
        mode: FilterMode,
        display: LedgerDisplay,
    ) -> None:
        """Fill ``display`` from the full transaction list and the active mode."""

        visible = filter_transactions(transactions, mode)
        # sorted() is stable with reverse=True, so same-day rows keep store order.
        ordered = sorted(visible, key=lambda transaction: transaction.occurred_on, reverse=True)
        summary = summarise(transactions)

        display.rows = [self.present_row(transaction) for transaction in ordered]
        display.empty_state_visible = not display.rows
        display.summary = summary
        display.income_text = self.money(summary.total_income)
        display.expense_text = self.money(summary.total_expense)
        display.balance_text = self.money(summary.balance)
        display.mode = mode
        LOGGER.debug(
            "Rendered %s of %s transactions for mode=%s",
            len(display.rows),
            len(transactions),
            mode.value,
        )


def _format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    widths = [len(header) for header in headers]
    for row in rows:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], len(cell))

    def format_row(row: Sequence[str]) -> str:
        return " | ".join(cell.ljust(widths[index]) for index, cell in enumerate(row)).rstrip()

    lines = [format_row(headers), "-+-".join("-" * width for width in widths)]
    lines.extend(format_row(row) for row in rows)
    return "\n".join(lines)


def render_text_table(display: LedgerDisplay) -> str:
    """Return the display as a text table followed by the summary lines."""

    if display.empty_state_visible:
        body = EMPTY_STATE_MESSAGE
    else:
        body = _format_table(
            TABLE_HEADERS,
            [
                [
                    row.date,
                    row.kind,
                    row.category,
                    row.description,
                    row.amount_text,
                    str(row.transaction_id),
                ]
                for row in display.rows
            ],
        )
    summary_lines = [
        f"Balance: {display.balance_text}",
        f"Income:  {display.income_text}",
        f"Expense: {display.expense_text}",
    ]
    return "\n".join([body, "", *summary_lines])
