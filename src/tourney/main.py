"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from tourney.api.fixtures import router as fixtures_router
from tourney.api.matches import router as matches_router
from tourney.api.standings import router as standings_router
from tourney.config import Settings
from tourney.db.engine import create_engine, create_tables

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: create engine and tables. Shutdown: dispose the engine."""
    settings: Settings = app.state.settings
    engine = create_engine(settings.database_url)
    await create_tables(engine)
    app.state.engine = engine
    logger.info("startup env=%s", settings.tourney_env)

    yield

    await engine.dispose()
    logger.info("shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the Tourney FastAPI application."""
    settings = settings or Settings()

    logging.basicConfig(
        level=getattr(logging, settings.tourney_log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Tourney",
        version="0.1.0",
        description="Round-robin fixture scheduling and league standings",
        docs_url="/docs" if settings.tourney_env != "production" else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.include_router(fixtures_router)
    app.include_router(matches_router)
    app.include_router(standings_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "env": settings.tourney_env}

    return app


app = create_app()
