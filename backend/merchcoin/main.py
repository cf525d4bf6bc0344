"""merchcoin API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LedgerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Session manager, unit of work and token issuer built in lifespan, stored on app.state
"""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from merchcoin.api.error_handlers import register_error_handlers
from merchcoin.api.routes import auth, health, ledger
from merchcoin.config import get_settings
from merchcoin.infrastructure.credentials import TokenIssuer
from merchcoin.infrastructure.database import DatabaseSessionManager
from merchcoin.infrastructure.observability import setup_logging
from merchcoin.infrastructure.unit_of_work import UnitOfWorkManager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    sessions = DatabaseSessionManager.from_url(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_timeout=settings.database_pool_timeout_seconds,
        command_timeout=settings.database_command_timeout_seconds,
    )
    app.state.session_manager = sessions
    app.state.unit_of_work = UnitOfWorkManager(
        sessions, timeout=settings.unit_of_work_timeout_seconds,
    )
    app.state.token_issuer = TokenIssuer(
        settings.jwt_secret_key, ttl=timedelta(hours=settings.token_ttl_hours),
    )
    logger.info("merchcoin API started")
    yield
    logger.info("merchcoin API shutting down")
    await sessions.dispose()


app = FastAPI(
    title="merchcoin API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(ledger.router)

register_error_handlers(app)
