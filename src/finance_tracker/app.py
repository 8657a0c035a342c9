import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from finance_tracker.api.routes import pages, reports, transactions
from finance_tracker.core import settings
from finance_tracker.logger import get_logger, setup_logging
from finance_tracker.services.ledger import LedgerService
from finance_tracker.services.seed import DEFAULT_CATEGORIES, DEMO_TRANSACTIONS

logger = get_logger(__name__)


def build_ledger() -> LedgerService:
    seed = settings.seed_demo_data()
    ledger = LedgerService(
        categories=DEFAULT_CATEGORIES,
        transactions=DEMO_TRANSACTIONS if seed else (),
        recent_limit=settings.recent_transactions_limit(),
    )
    logger.info(
        "[LEDGER] Ready with %d categories and %d transactions (demo data %s).",
        len(ledger.categories()),
        len(ledger.snapshot),
        "on" if seed else "off",
    )
    return ledger


def create_app() -> FastAPI:
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Initializing services...")
        settings.log_environment()
        app.state.ledger = build_ledger()
        logger.info("Services initialized.")
        yield
        logger.info("Service shutting down.")

    app = FastAPI(title="Finance Tracker", lifespan=lifespan)

    static_dir = os.path.join(os.path.dirname(__file__), "web", "static")
    app.mount("/static", StaticFiles(directory=static_dir), name="static")

    app.include_router(transactions.router)
    app.include_router(reports.router)
    app.include_router(pages.router)

    return app


app = create_app()
