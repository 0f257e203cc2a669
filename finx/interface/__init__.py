"""Mini README: Interactive interfaces (web/CLI) for FinX.

Exports the FastAPI application factory that powers the browser dashboard,
the controller that both the dashboard and the command line drive, and the
presenter that fills their display slots.
"""

from .controller import LedgerController, build_controller, build_storage
from .presenter import LedgerDisplay, LedgerPresenter, PresentedRow, format_money, render_text_table
from .web_app import create_application

__all__ = [
    "LedgerController",
    "LedgerDisplay",
    "LedgerPresenter",
    "PresentedRow",
    "build_controller",
    "build_storage",
    "create_application",
    "format_money",
    "render_text_table",
]
