"""Admin API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map AdminError → error envelope through RequestContext
    - Every request carries a trace id (TraceIDMiddleware) before any route runs
    - CORS configured from settings (not hardcoded)
    - Session store is a signed cookie (SessionMiddleware) keyed by settings.session_secret_key
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Trace middleware added last so it wraps CORS and sees every request first
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from admin_backend.api.error_handlers import register_error_handlers
from admin_backend.api.routes import demos, health
from admin_backend.config import get_settings
from admin_backend.infrastructure.database import init_db
from admin_backend.infrastructure.observability import setup_logging
from admin_backend.infrastructure.tracing import TraceIDMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Admin API started")
    yield
    logger.info("Admin API shutting down")


app = FastAPI(title="Admin API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret_key,
    session_cookie=settings.session_cookie,
    max_age=settings.session_max_age,
    https_only=settings.session_https_only,
)
app.add_middleware(TraceIDMiddleware, header_name=settings.trace_header)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(demos.router)

register_error_handlers(app)
