from typing import Annotated

from fastapi import APIRouter, Depends, Query

from finance_tracker.api.dependencies import get_ledger
from finance_tracker.domain.aggregation import category_breakdown, compute_totals, monthly_series
from finance_tracker.models import CategoryTotal, DashboardSummary, MonthlyTotals, Totals
from finance_tracker.services.ledger import LedgerService

router = APIRouter(prefix="/api")

YearParam = Annotated[int | None, Query(ge=1, le=9999)]


@router.get("/summary")
async def get_summary(
    ledger: Annotated[LedgerService, Depends(get_ledger)],
) -> Totals:
    return compute_totals(ledger.snapshot.transactions)


@router.get("/reports/categories")
async def get_category_report(
    ledger: Annotated[LedgerService, Depends(get_ledger)],
) -> list[CategoryTotal]:
    return category_breakdown(ledger.snapshot.transactions, ledger.category_map)


@router.get("/reports/monthly")
async def get_monthly_report(
    ledger: Annotated[LedgerService, Depends(get_ledger)],
    year: YearParam = None,
) -> list[MonthlyTotals]:
    return monthly_series(ledger.snapshot.transactions, year=year)


@router.get("/dashboard")
async def get_dashboard(
    ledger: Annotated[LedgerService, Depends(get_ledger)],
    year: YearParam = None,
) -> DashboardSummary:
    return ledger.summary(year=year)
