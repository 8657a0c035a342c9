from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal

from finance_tracker.models import (
    Category,
    CategoryTotal,
    DashboardSummary,
    MonthlyTotals,
    Totals,
    Transaction,
    TransactionKind,
    TransactionRow,
)

ZERO = Decimal("0.00")

MONTH_LABELS = (
    "Jan", "Fev", "Mar", "Abr", "Mai", "Jun",
    "Jul", "Ago", "Set", "Out", "Nov", "Dez",
)

UNKNOWN_CATEGORY_LABEL = "N/A"

DEFAULT_RECENT_LIMIT = 10


def sum_amounts(transactions: Iterable[Transaction], kind: TransactionKind) -> Decimal:
    return sum((t.amount for t in transactions if t.kind == kind), ZERO)


def compute_totals(transactions: Sequence[Transaction]) -> Totals:
    income = sum_amounts(transactions, "income")
    expense = sum_amounts(transactions, "expense")
    return Totals(income=income, expense=expense, balance=income - expense)


def category_breakdown(
    transactions: Sequence[Transaction],
    categories: Mapping[int, Category],
) -> list[CategoryTotal]:
    """Expense totals per expense category, in category order, zero totals omitted."""
    totals: dict[int, Decimal] = {}
    for t in transactions:
        if t.kind == "expense":
            totals[t.category_id] = totals.get(t.category_id, ZERO) + t.amount

    breakdown: list[CategoryTotal] = []
    for category in categories.values():
        if category.kind != "expense":
            continue
        total = totals.get(category.id, ZERO)
        if total > 0:
            breakdown.append(CategoryTotal(category_id=category.id, name=category.name, total=total))
    return breakdown


def monthly_series(
    transactions: Sequence[Transaction],
    year: int | None = None,
) -> list[MonthlyTotals]:
    """
    Income/expense per calendar month.

    Buckets by month-of-year, so transactions from different years land in
    the same bucket unless ``year`` narrows the input to a single year.
    """
    income = [ZERO] * 12
    expense = [ZERO] * 12
    for t in transactions:
        if year is not None and t.date.year != year:
            continue
        index = t.date.month - 1
        if t.kind == "income":
            income[index] += t.amount
        else:
            expense[index] += t.amount

    return [
        MonthlyTotals(month=i + 1, label=MONTH_LABELS[i], income=income[i], expense=expense[i])
        for i in range(12)
    ]


def recent_transactions(
    transactions: Sequence[Transaction],
    limit: int = DEFAULT_RECENT_LIMIT,
) -> list[Transaction]:
    # Insertion order, not date order.
    if limit <= 0:
        return []
    return list(reversed(transactions[-limit:]))


def resolve_category_name(category_id: int, categories: Mapping[int, Category]) -> str:
    category = categories.get(category_id)
    return category.name if category else UNKNOWN_CATEGORY_LABEL


def build_transaction_rows(
    transactions: Iterable[Transaction],
    categories: Mapping[int, Category],
) -> list[TransactionRow]:
    return [
        TransactionRow(transaction=t, category_name=resolve_category_name(t.category_id, categories))
        for t in transactions
    ]


def summarize(
    transactions: Sequence[Transaction],
    categories: Mapping[int, Category],
    *,
    recent_limit: int = DEFAULT_RECENT_LIMIT,
    year: int | None = None,
) -> DashboardSummary:
    return DashboardSummary(
        totals=compute_totals(transactions),
        categories=category_breakdown(transactions, categories),
        monthly=monthly_series(transactions, year=year),
        recent=build_transaction_rows(recent_transactions(transactions, recent_limit), categories),
        year=year,
    )
