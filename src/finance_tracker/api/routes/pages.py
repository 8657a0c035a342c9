import os
from datetime import date
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from finance_tracker.api.dependencies import get_ledger
from finance_tracker.domain.charts import build_expense_pie, build_monthly_bars
from finance_tracker.domain.forms import default_form_values, validate_transaction_form
from finance_tracker.domain.formatting import (
    balance_tone,
    format_amount,
    format_currency,
    format_date,
    kind_label,
)
from finance_tracker.logger import get_logger
from finance_tracker.services.ledger import LedgerService, TransactionRejected

logger = get_logger(__name__)

router = APIRouter()

templates_dir = os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "..", "web", "templates")
)
templates = Jinja2Templates(directory=templates_dir)
templates.env.filters["currency"] = format_currency
templates.env.filters["amount"] = format_amount
templates.env.filters["br_date"] = format_date
templates.env.filters["kind_label"] = kind_label

TABS = ("dashboard", "add")


def _dashboard_context(
    ledger: LedgerService,
    *,
    tab: str,
    year: int | None,
    form_values: dict[str, str],
    errors: dict[str, str],
    added: bool = False,
) -> dict[str, Any]:
    summary = ledger.summary(year=year)
    return {
        "summary": summary,
        "balance_tone": balance_tone(summary.totals.balance),
        "pie_chart": build_expense_pie(summary.categories),
        "bar_chart": build_monthly_bars(summary.monthly),
        "categories": ledger.categories(),
        "tab": tab if tab in TABS else "dashboard",
        "year": year,
        "form": form_values,
        "errors": errors,
        "added": added,
    }


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    ledger: Annotated[LedgerService, Depends(get_ledger)],
    tab: str = "dashboard",
    year: Annotated[int | None, Query(ge=1, le=9999)] = None,
    added: bool = False,
) -> HTMLResponse:
    context = _dashboard_context(
        ledger,
        tab=tab,
        year=year,
        form_values=default_form_values(date.today()),
        errors={},
        added=added,
    )
    return templates.TemplateResponse(request, "index.html", context)


@router.post("/transactions", response_class=HTMLResponse)
async def submit_transaction(
    request: Request,
    ledger: Annotated[LedgerService, Depends(get_ledger)],
) -> Response:
    form = await request.form()
    form_values = {key: str(value) for key, value in form.items()}
    new_transaction, errors = validate_transaction_form(form_values, ledger.category_map)

    if new_transaction is not None:
        try:
            ledger.add_transaction(new_transaction)
        except TransactionRejected as exc:
            errors = {exc.field: exc.message}
        else:
            return RedirectResponse(url="/?added=1", status_code=303)

    logger.info("[FORM] Transaction form rejected: %s", ", ".join(sorted(errors)))
    context = _dashboard_context(
        ledger,
        tab="add",
        year=None,
        form_values={**default_form_values(date.today()), **form_values},
        errors=errors,
    )
    return templates.TemplateResponse(request, "index.html", context, status_code=422)
