from datetime import date
from decimal import Decimal

from finance_tracker.models import Category, Transaction

DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category(id=1, name="Alimentação", kind="expense"),
    Category(id=2, name="Transporte", kind="expense"),
    Category(id=3, name="Salário", kind="income"),
    Category(id=4, name="Investimentos", kind="income"),
    Category(id=5, name="Lazer", kind="expense"),
    Category(id=6, name="Saúde", kind="expense"),
)

DEMO_TRANSACTIONS: tuple[Transaction, ...] = (
    Transaction(
        id=1,
        amount=Decimal("5000.00"),
        kind="income",
        category_id=3,
        description="Salário",
        date=date(2024, 1, 15),
    ),
    Transaction(
        id=2,
        amount=Decimal("300.00"),
        kind="expense",
        category_id=1,
        description="Supermercado",
        date=date(2024, 1, 16),
    ),
    Transaction(
        id=3,
        amount=Decimal("150.00"),
        kind="expense",
        category_id=2,
        description="Combustível",
        date=date(2024, 1, 17),
    ),
)
