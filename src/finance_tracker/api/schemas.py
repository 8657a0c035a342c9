from pydantic import BaseModel

from finance_tracker.models import Transaction


class TransactionList(BaseModel):
    version: int
    count: int
    transactions: list[Transaction]


class RejectionDetail(BaseModel):
    field: str
    message: str
