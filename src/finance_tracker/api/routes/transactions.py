from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from finance_tracker.api.dependencies import get_ledger
from finance_tracker.api.schemas import RejectionDetail, TransactionList
from finance_tracker.models import Category, NewTransaction, Transaction, TransactionKind
from finance_tracker.services.ledger import LedgerService, TransactionRejected

router = APIRouter(prefix="/api")


@router.get("/categories")
async def list_categories(
    ledger: Annotated[LedgerService, Depends(get_ledger)],
    kind: TransactionKind | None = None,
) -> list[Category]:
    return ledger.categories(kind)


@router.get("/transactions")
async def list_transactions(
    ledger: Annotated[LedgerService, Depends(get_ledger)],
) -> TransactionList:
    snapshot = ledger.snapshot
    return TransactionList(
        version=snapshot.version,
        count=len(snapshot),
        transactions=list(snapshot.transactions),
    )


@router.post("/transactions", status_code=201)
async def create_transaction(
    new_transaction: NewTransaction,
    ledger: Annotated[LedgerService, Depends(get_ledger)],
) -> Transaction:
    try:
        return ledger.add_transaction(new_transaction)
    except TransactionRejected as exc:
        raise HTTPException(
            status_code=422,
            detail=RejectionDetail(field=exc.field, message=exc.message).model_dump(),
        ) from exc
