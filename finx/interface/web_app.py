"""Mini README: FastAPI-powered dashboard for the FinX ledger.

Structure:
    * create_application - application factory wiring routes and templates.
    * _ledger_payload - JSON rendition of a display and the current chart.

The dashboard plays the part of the single-page ledger: a summary strip,
filter menu, entry form, transaction table with per-row removal, a guarded
"clear all" control, and a doughnut chart of category totals. HTML routes
follow post/redirect/get so a browser refresh never repeats a mutation;
``/api/ledger`` exposes the same view as JSON for scripting.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from .. import __version__
from ..configuration import FinxSettings, get_settings
from ..errors import InvalidAmountError, InvalidTransactionTypeError, MountingPointError
from ..finance.charts import TemplateChartSurface
from ..finance.storage import TransactionStorage
from ..finance.views import FilterMode
from ..logging_utils import get_logger
from .controller import LedgerController, build_controller
from .presenter import LedgerDisplay

LOGGER = get_logger(__name__)

TEMPLATE_DIRECTORY = Path(__file__).parent / "templates"
STATIC_DIRECTORY = Path(__file__).parent / "static"
DASHBOARD_TEMPLATE = "dashboard.html"


def _parse_mode(token: Optional[str]) -> FilterMode:
    try:
        return FilterMode.from_token(token)
    except ValueError as error:
        raise HTTPException(status_code=400, detail=str(error)) from error


def _ledger_payload(controller: LedgerController, display: LedgerDisplay) -> Dict[str, object]:
    """Serialise a display for JSON clients."""

    chart = controller.chart_projector.current
    return {
        "filter": display.mode.value,
        "empty": display.empty_state_visible,
        "rows": [
            {
                "id": row.transaction_id,
                "date": row.date,
                "kind": row.kind,
                "category": row.category,
                "description": row.description,
                "amount": row.amount_text,
            }
            for row in display.rows
        ],
        "summary": {
            "balance": display.balance_text,
            "income": display.income_text,
            "expense": display.expense_text,
            "totals": display.summary.as_dict(),
        },
        "chart": chart.as_dict() if chart is not None else None,
    }


def create_application(
    settings: Optional[FinxSettings] = None,
    storage: Optional[TransactionStorage] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    if not (TEMPLATE_DIRECTORY / DASHBOARD_TEMPLATE).is_file():
        LOGGER.error("Dashboard template missing from %s", TEMPLATE_DIRECTORY)
        raise MountingPointError(f"Dashboard template not found in {TEMPLATE_DIRECTORY}")

    app = FastAPI(title="FinX Ledger", version=__version__)
    templates = Jinja2Templates(directory=str(TEMPLATE_DIRECTORY))
    if STATIC_DIRECTORY.is_dir():
        app.mount("/static", StaticFiles(directory=str(STATIC_DIRECTORY)), name="static")
    else:
        LOGGER.warning("Static directory %s missing; dashboard will render unstyled", STATIC_DIRECTORY)

    chart_surface = TemplateChartSurface(settings.chart_script_url)
    if not chart_surface.available:
        LOGGER.warning("No chart script configured; category chart disabled")
    controller = build_controller(settings, storage=storage, chart_surface=chart_surface)
    app.state.controller = controller

    def render_dashboard(
        request: Request, *, error: Optional[str] = None, status_code: int = 200
    ) -> HTMLResponse:
        display = controller.display
        chart = chart_surface.current
        return templates.TemplateResponse(
            request,
            DASHBOARD_TEMPLATE,
            {
                "display": display,
                "filter_modes": list(FilterMode),
                "error": error,
                "chart": chart.as_dict() if chart is not None else None,
                "chart_script_url": settings.chart_script_url,
                "ledger_size": len(controller.store),
            },
            status_code=status_code,
        )

    def back_to_dashboard() -> RedirectResponse:
        return RedirectResponse(url=f"/?filter={controller.mode.value}", status_code=303)

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(request: Request, filter: Optional[str] = None) -> HTMLResponse:
        """Render the ledger for the requested filter mode."""

        controller.set_filter(_parse_mode(filter))
        return render_dashboard(request)

    @app.post("/transactions")
    async def add_transaction(
        request: Request,
        kind: str = Form(...),
        amount: str = Form(""),
        category: str = Form(""),
        description: str = Form(""),
        filter: Optional[str] = Form(None),
    ):
        """Record a transaction submitted from the entry form."""

        if filter is not None:
            controller.set_filter(_parse_mode(filter))
        try:
            controller.submit(kind, amount, category, description)
        except (InvalidAmountError, InvalidTransactionTypeError) as error:
            LOGGER.info("Rejected transaction submission: %s", error)
            return render_dashboard(request, error=str(error), status_code=400)
        return back_to_dashboard()

    @app.post("/transactions/clear")
    async def clear_transactions(confirm: bool = Form(False)) -> RedirectResponse:
        """Delete every transaction when the user confirmed the prompt."""

        controller.clear(lambda _message: confirm)
        return back_to_dashboard()

    @app.post("/transactions/{transaction_id}/delete")
    async def delete_transaction(transaction_id: int) -> RedirectResponse:
        """Remove a single transaction; unknown ids are ignored."""

        controller.remove(transaction_id)
        return back_to_dashboard()

    @app.get("/api/ledger")
    async def ledger_api(filter: Optional[str] = None) -> JSONResponse:
        """Return rows, totals and chart data for the requested filter."""

        display = controller.view(_parse_mode(filter))
        return JSONResponse(_ledger_payload(controller, display))

    return app
