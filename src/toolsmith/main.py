"""FastAPI application factory and lifespan management."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from toolsmith import __version__
from toolsmith.config import settings
from toolsmith.db.engine import create_db_engine, create_session_factory
from toolsmith.logging_config import configure_logging

# Configure logging at import time
configure_logging(log_level=settings.log_level, json_output=not settings.local_mode)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown resources."""
    db_url = settings.effective_database_url
    engine = create_db_engine(db_url)

    # Auto-create tables for SQLite (local dev, no Alembic migrations)
    if "sqlite" in db_url:
        from toolsmith.db.base import Base
        import toolsmith.db.models  # noqa: F401

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("SQLite tables created (local mode)")

    app.state.db_engine = engine
    app.state.db_session_factory = create_session_factory(engine)

    logger.info("Toolsmith API started (db=%s)", "sqlite" if "sqlite" in db_url else "postgresql")
    yield

    await engine.dispose()
    logger.info("Toolsmith API shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Toolsmith API",
        version=__version__,
        description="Backend for building internal tools: workspaces, SSO and data-source queries.",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Last added = first executed: auth runs before the trace id is bound to logs
    from toolsmith.api.middleware.auth import AuthMiddleware
    from toolsmith.api.middleware.trace_id import TraceIdMiddleware
    app.add_middleware(TraceIdMiddleware)
    app.add_middleware(AuthMiddleware)

    from toolsmith.errors.handlers import register_exception_handlers
    register_exception_handlers(app)

    from toolsmith.api.router import api_router
    app.include_router(api_router)

    return app


app = create_app()
