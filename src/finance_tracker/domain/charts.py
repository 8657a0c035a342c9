from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from finance_tracker.models import CategoryTotal, MonthlyTotals

PIE_COLORS = ("#3b82f6", "#10b981", "#f59e0b", "#ef4444", "#8b5cf6", "#ec4899")
INCOME_COLOR = "#10b981"
EXPENSE_COLOR = "#ef4444"


def _percent(part: Decimal, whole: Decimal) -> int:
    if whole <= 0:
        return 0
    return int((part * 100 / whole).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def build_expense_pie(breakdown: list[CategoryTotal]) -> dict[str, Any]:
    grand_total = sum((item.total for item in breakdown), Decimal("0"))
    labels: list[str] = []
    values: list[float] = []
    colors: list[str] = []
    percentages: list[int] = []
    for index, item in enumerate(breakdown):
        percent = _percent(item.total, grand_total)
        labels.append(f"{item.name} {percent}%")
        values.append(float(item.total))
        colors.append(PIE_COLORS[index % len(PIE_COLORS)])
        percentages.append(percent)
    return {
        "labels": labels,
        "values": values,
        "colors": colors,
        "percentages": percentages,
    }


def build_monthly_bars(series: list[MonthlyTotals]) -> dict[str, Any]:
    return {
        "labels": [bucket.label for bucket in series],
        "datasets": [
            {
                "key": "income",
                "label": "Receitas",
                "color": INCOME_COLOR,
                "values": [float(bucket.income) for bucket in series],
            },
            {
                "key": "expense",
                "label": "Despesas",
                "color": EXPENSE_COLOR,
                "values": [float(bucket.expense) for bucket in series],
            },
        ],
    }
