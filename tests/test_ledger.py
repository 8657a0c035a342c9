from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.domain.ledger import LedgerSnapshot, next_transaction_id
from finance_tracker.models import Category, NewTransaction
from finance_tracker.services.ledger import LedgerService, TransactionRejected
from finance_tracker.services.seed import DEFAULT_CATEGORIES, DEMO_TRANSACTIONS


def new_expense(amount: str = "42.00", category_id: int = 1) -> NewTransaction:
    return NewTransaction(
        amount=Decimal(amount),
        kind="expense",
        category_id=category_id,
        description="Mercado",
        date=date(2024, 2, 10),
    )


class FakeClock:
    def __init__(self, now_ms: int) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(1_700_000_000_000)


@pytest.fixture
def ledger(clock: FakeClock) -> LedgerService:
    return LedgerService(DEFAULT_CATEGORIES, DEMO_TRANSACTIONS, clock=clock)


def test_snapshot_append_returns_new_snapshot() -> None:
    before = LedgerSnapshot.from_transactions(DEMO_TRANSACTIONS)
    after = before.append(new_expense(), transaction_id=99)

    assert before.version == 0
    assert len(before) == 3
    assert after.version == 1
    assert len(after) == 4
    assert after.transactions[:3] == before.transactions
    assert after.transactions[-1].id == 99
    assert after.transactions[-1].amount == Decimal("42.00")


def test_next_transaction_id_uses_clock() -> None:
    snapshot = LedgerSnapshot.from_transactions(DEMO_TRANSACTIONS)
    assert next_transaction_id(snapshot, 5000) == 5000
    assert next_transaction_id(LedgerSnapshot(), 7) == 7


def test_last_id_tracks_latest_append() -> None:
    snapshot = LedgerSnapshot()
    assert snapshot.last_id is None
    snapshot = snapshot.append(new_expense(), transaction_id=10).append(new_expense(), transaction_id=11)
    assert snapshot.last_id == 11


def test_new_transaction_rounds_amount_and_strips_description() -> None:
    tx = NewTransaction(
        amount=Decimal("7.5"),
        kind="expense",
        category_id=1,
        description="  Padaria ",
        date=date(2024, 2, 1),
    )
    assert str(tx.amount) == "7.50"
    assert tx.description == "Padaria"


def test_next_transaction_id_moves_past_collisions() -> None:
    snapshot = LedgerSnapshot().append(new_expense(), transaction_id=5000)
    assert next_transaction_id(snapshot, 5000) == 5001
    assert next_transaction_id(snapshot, 4000) == 5001


def test_add_transaction_assigns_id_and_keeps_old_snapshot(ledger: LedgerService, clock: FakeClock) -> None:
    previous = ledger.snapshot
    created = ledger.add_transaction(new_expense())

    assert created.id == clock.now_ms
    assert ledger.snapshot is not previous
    assert ledger.snapshot.version == previous.version + 1
    assert len(previous) == 3
    assert ledger.snapshot.transactions[-1] == created


def test_add_transaction_ids_stay_unique_within_same_millisecond(ledger: LedgerService) -> None:
    first = ledger.add_transaction(new_expense())
    second = ledger.add_transaction(new_expense("1.00"))
    assert second.id == first.id + 1
    assert len({t.id for t in ledger.snapshot.transactions}) == 5


def test_add_transaction_rejects_unknown_category(ledger: LedgerService) -> None:
    with pytest.raises(TransactionRejected) as excinfo:
        ledger.add_transaction(new_expense(category_id=404))
    assert excinfo.value.field == "category_id"
    assert len(ledger.snapshot) == 3


def test_add_transaction_rejects_kind_mismatch(ledger: LedgerService) -> None:
    with pytest.raises(TransactionRejected, match="não corresponde"):
        ledger.add_transaction(new_expense(category_id=3))
    assert ledger.snapshot.version == 0


def test_categories_filter_by_kind(ledger: LedgerService) -> None:
    assert [c.name for c in ledger.categories("income")] == ["Salário", "Investimentos"]
    assert len(ledger.categories("expense")) == 4
    assert len(ledger.categories()) == 6
    assert ledger.get_category(5).name == "Lazer"
    assert ledger.get_category(404) is None


def test_duplicate_category_ids_are_rejected() -> None:
    duplicate = (
        Category(id=1, name="A", kind="expense"),
        Category(id=1, name="B", kind="income"),
    )
    with pytest.raises(ValueError, match="Duplicate category id 1"):
        LedgerService(duplicate)


def test_summary_reflects_added_transactions(ledger: LedgerService) -> None:
    ledger.add_transaction(new_expense("50.00", category_id=5))
    summary = ledger.summary()

    assert summary.totals.income == Decimal("5000.00")
    assert summary.totals.expense == Decimal("500.00")
    assert summary.totals.balance == Decimal("4500.00")
    assert [c.name for c in summary.categories] == ["Alimentação", "Transporte", "Lazer"]
    assert summary.monthly[1].expense == Decimal("50.00")
    assert summary.recent[0].transaction.description == "Mercado"


def test_summary_respects_recent_limit(clock: FakeClock) -> None:
    ledger = LedgerService(DEFAULT_CATEGORIES, DEMO_TRANSACTIONS, recent_limit=2, clock=clock)
    assert [row.transaction.id for row in ledger.summary().recent] == [3, 2]
