from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from finance_tracker.models import NewTransaction, Transaction


@dataclass(frozen=True)
class LedgerSnapshot:
    """An immutable, versioned view of the transaction list."""

    version: int = 0
    transactions: tuple[Transaction, ...] = field(default_factory=tuple)

    @classmethod
    def from_transactions(cls, transactions: Iterable[Transaction]) -> LedgerSnapshot:
        return cls(version=0, transactions=tuple(transactions))

    def __len__(self) -> int:
        return len(self.transactions)

    @property
    def last_id(self) -> int | None:
        if not self.transactions:
            return None
        # Ids are assigned in increasing order.
        return self.transactions[-1].id

    def append(self, new_transaction: NewTransaction, transaction_id: int) -> LedgerSnapshot:
        transaction = Transaction(id=transaction_id, **new_transaction.model_dump())
        return LedgerSnapshot(
            version=self.version + 1,
            transactions=(*self.transactions, transaction),
        )


def next_transaction_id(snapshot: LedgerSnapshot, now_ms: int) -> int:
    last_id = snapshot.last_id
    if last_id is None or now_ms > last_id:
        return now_ms
    return last_id + 1
