"""Transaction Ledger API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LedgerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Exactly one TransactionLedger per process, built in the lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Ledger stored on app.state and injected via get_ledger, never a module global
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from txledger.api.error_handlers import register_error_handlers
from txledger.api.routes import health, ledger_queries, transactions
from txledger.config import get_settings
from txledger.core.ledger import TransactionLedger
from txledger.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.ledger = TransactionLedger(
        recency_window_ms=settings.recency_window_ms,
    )
    logger.info("Transaction ledger API started")
    yield
    logger.info("Transaction ledger API shutting down")


app = FastAPI(
    title="Transaction Ledger API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(transactions.router)
app.include_router(ledger_queries.router)

register_error_handlers(app)
