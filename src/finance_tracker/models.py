from datetime import date as Date
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

TransactionKind = Literal["income", "expense"]

CENT = Decimal("0.01")


class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    kind: TransactionKind


class NewTransaction(BaseModel):
    """A transaction as submitted, before the ledger assigns it an id."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    amount: Decimal = Field(gt=0, decimal_places=2)
    kind: TransactionKind
    category_id: int
    description: str = Field(min_length=1)
    date: Date

    @field_validator("amount")
    @classmethod
    def _round_to_cents(cls, value: Decimal) -> Decimal:
        return value.quantize(CENT)


class Transaction(NewTransaction):
    id: int


class Totals(BaseModel):
    income: Decimal
    expense: Decimal
    balance: Decimal


class CategoryTotal(BaseModel):
    category_id: int
    name: str
    total: Decimal


class MonthlyTotals(BaseModel):
    month: int  # 1..12
    label: str
    income: Decimal
    expense: Decimal


class TransactionRow(BaseModel):
    transaction: Transaction
    category_name: str


class DashboardSummary(BaseModel):
    totals: Totals
    categories: list[CategoryTotal]
    monthly: list[MonthlyTotals]
    recent: list[TransactionRow]
    year: int | None = None
