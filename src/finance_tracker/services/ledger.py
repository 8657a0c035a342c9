import time
from collections.abc import Callable, Iterable

from finance_tracker.domain.aggregation import DEFAULT_RECENT_LIMIT, summarize
from finance_tracker.domain.forms import check_category
from finance_tracker.domain.ledger import LedgerSnapshot, next_transaction_id
from finance_tracker.logger import get_logger
from finance_tracker.models import (
    Category,
    DashboardSummary,
    NewTransaction,
    Transaction,
    TransactionKind,
)

logger = get_logger(__name__)


class TransactionRejected(ValueError):
    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class LedgerService:
    """
    Owns the session's category table and current transaction snapshot.

    Adding a transaction swaps in a new snapshot; snapshots handed out
    earlier are never modified.
    """

    def __init__(
        self,
        categories: Iterable[Category],
        transactions: Iterable[Transaction] = (),
        *,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self._categories: dict[int, Category] = {}
        for category in categories:
            if category.id in self._categories:
                raise ValueError(f"Duplicate category id {category.id}")
            self._categories[category.id] = category
        self._snapshot = LedgerSnapshot.from_transactions(transactions)
        self.recent_limit = recent_limit
        self._clock = clock

    @property
    def snapshot(self) -> LedgerSnapshot:
        return self._snapshot

    @property
    def category_map(self) -> dict[int, Category]:
        return dict(self._categories)

    def categories(self, kind: TransactionKind | None = None) -> list[Category]:
        return [c for c in self._categories.values() if kind is None or c.kind == kind]

    def get_category(self, category_id: int) -> Category | None:
        return self._categories.get(category_id)

    def add_transaction(self, new_transaction: NewTransaction) -> Transaction:
        error = check_category(new_transaction.category_id, new_transaction.kind, self._categories)
        if error:
            logger.warning(
                "[LEDGER] Rejected transaction for category %s (%s): %s",
                new_transaction.category_id,
                new_transaction.kind,
                error,
            )
            raise TransactionRejected("category_id", error)

        current = self._snapshot
        transaction_id = next_transaction_id(current, self._clock())
        self._snapshot = current.append(new_transaction, transaction_id)
        logger.info(
            "[LEDGER] Added %s %s to category %s (id=%s, version=%s).",
            new_transaction.kind,
            new_transaction.amount,
            new_transaction.category_id,
            transaction_id,
            self._snapshot.version,
        )
        return self._snapshot.transactions[-1]

    def summary(self, year: int | None = None) -> DashboardSummary:
        snapshot = self._snapshot
        logger.debug(
            "[LEDGER] Summarizing %d transactions (version=%s, year=%s).",
            len(snapshot),
            snapshot.version,
            year if year is not None else "all",
        )
        return summarize(
            snapshot.transactions,
            self._categories,
            recent_limit=self.recent_limit,
            year=year,
        )
