from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from finance_tracker.models import CENT, Category, NewTransaction, TransactionKind

FORM_FIELDS = ("kind", "category_id", "amount", "description", "date")


def default_form_values(today: date | None = None) -> dict[str, str]:
    today = today or date.today()
    return {
        "kind": "expense",
        "category_id": "",
        "amount": "",
        "description": "",
        "date": today.isoformat(),
    }


def parse_amount(raw_value: str) -> tuple[Decimal | None, str | None]:
    value = raw_value.strip()
    if not value:
        return None, "Valor é obrigatório"

    # Accept the pt-BR decimal comma ("1.234,56").
    if "," in value:
        value = value.replace(".", "").replace(",", ".")

    try:
        amount = Decimal(value)
    except InvalidOperation:
        return None, "Valor inválido"
    if not amount.is_finite():
        return None, "Valor inválido"
    if amount <= 0:
        return None, "Valor deve ser maior que zero"
    try:
        quantized = amount.quantize(CENT)
    except InvalidOperation:
        return None, "Valor inválido"
    if quantized != amount:
        return None, "Valor deve ter no máximo duas casas decimais"
    return quantized, None


def parse_kind(raw_value: str) -> tuple[TransactionKind | None, str | None]:
    value = raw_value.strip().lower()
    if value == "income":
        return "income", None
    if value == "expense":
        return "expense", None
    return None, "Tipo de transação inválido"


def parse_date(raw_value: str) -> tuple[date | None, str | None]:
    value = raw_value.strip()
    if not value:
        return None, "Data é obrigatória"
    try:
        return datetime.strptime(value, "%Y-%m-%d").date(), None
    except ValueError:
        return None, "Data inválida"


def check_category(
    category_id: int,
    kind: TransactionKind | None,
    categories: Mapping[int, Category],
) -> str | None:
    category = categories.get(category_id)
    if category is None:
        return "Categoria inválida"
    if kind is not None and category.kind != kind:
        return "Categoria não corresponde ao tipo da transação"
    return None


def parse_category(
    raw_value: str,
    kind: TransactionKind | None,
    categories: Mapping[int, Category],
) -> tuple[int | None, str | None]:
    value = raw_value.strip()
    if not value:
        return None, "Categoria é obrigatória"
    try:
        category_id = int(value)
    except ValueError:
        return None, "Categoria inválida"
    error = check_category(category_id, kind, categories)
    if error:
        return None, error
    return category_id, None


def validate_transaction_form(
    form: Mapping[str, Any],
    categories: Mapping[int, Category],
) -> tuple[NewTransaction | None, dict[str, str]]:
    """
    Validate a submitted "new transaction" form.

    Returns the parsed transaction and an empty error mapping, or ``None``
    and one message per offending field.
    """
    values = {key: str(form.get(key) or "") for key in FORM_FIELDS}
    errors: dict[str, str] = {}

    kind, error = parse_kind(values["kind"])
    if error:
        errors["kind"] = error

    category_id, error = parse_category(values["category_id"], kind, categories)
    if error:
        errors["category_id"] = error

    amount, error = parse_amount(values["amount"])
    if error:
        errors["amount"] = error

    description = values["description"].strip()
    if not description:
        errors["description"] = "Descrição é obrigatória"

    tx_date, error = parse_date(values["date"])
    if error:
        errors["date"] = error

    if errors:
        return None, errors

    return NewTransaction(
        amount=amount,
        kind=kind,
        category_id=category_id,
        description=description,
        date=tx_date,
    ), {}
