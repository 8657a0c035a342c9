from datetime import date
from decimal import Decimal

from finance_tracker.models import TransactionKind

CURRENCY_SYMBOL = "R$"

KIND_LABELS: dict[str, str] = {
    "income": "Receita",
    "expense": "Despesa",
}


def format_amount(amount: Decimal | float) -> str:
    """Format as pt-BR number with two decimals, e.g. '1.234,56'."""
    raw = f"{abs(amount):,.2f}"
    localized = raw.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"-{localized}" if amount < 0 else localized


def format_currency(amount: Decimal | float) -> str:
    return f"{CURRENCY_SYMBOL} {format_amount(amount)}"


def format_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def kind_label(kind: TransactionKind | str) -> str:
    return KIND_LABELS.get(kind, kind)


def balance_tone(balance: Decimal) -> str:
    return "positive" if balance >= 0 else "negative"
