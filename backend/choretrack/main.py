"""choretrack API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ChoreTrackError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, snapshot feed and ChoreService initialized on startup via lifespan;
      feed closed (all subscriptions cancelled) on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from choretrack.api.dependencies import init_chore_service
from choretrack.api.error_handlers import register_error_handlers
from choretrack.api.routes import chores, health, households
from choretrack.config import get_settings
from choretrack.infrastructure.database import init_db
from choretrack.infrastructure.observability import setup_logging
from choretrack.infrastructure.snapshot_feed import SnapshotFeed
from choretrack.infrastructure.sql_store import SqlChoreStore, SqlMemberDirectory
from choretrack.services.chore_service import ChoreService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    feed = SnapshotFeed()
    init_chore_service(ChoreService(
        store=SqlChoreStore(manager.session, feed),
        members=SqlMemberDirectory(manager.session),
    ))
    logger.info("choretrack API started")
    yield
    await feed.close()
    await manager.dispose()
    logger.info("choretrack API shutting down")


app = FastAPI(
    title="choretrack API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(households.router)
app.include_router(chores.router)

register_error_handlers(app)
