"""FastAPI application for the golf round ledger."""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from database.connection import DatabasePool, PoolSettings
from database.db_manager import DatabaseManager
from llm.round_extractor import GeminiRoundExtractor, UnconfiguredExtractor, create_client
from services import ExtractionClient, RoundService

load_dotenv()

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def build_extractor() -> ExtractionClient:
    """Gemini extractor when GOOGLE_API_KEY is set; otherwise one that always fails."""
    try:
        return GeminiRoundExtractor(create_client())
    except EnvironmentError as e:
        logger.warning("Text extraction disabled: %s", e)
        return UnconfiguredExtractor()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize DB pool on startup, close on shutdown.

    Skipped when a service was injected (tests, alternative stores).
    """
    if getattr(app.state, "round_service", None) is not None:
        app.state.pool = None
        yield
        return

    pool = DatabasePool(PoolSettings.from_env())
    await pool.initialize()
    await pool.initialize_schema()
    db_manager = DatabaseManager(pool.pool)
    app.state.pool = pool
    app.state.round_service = RoundService(db_manager.rounds, build_extractor())
    try:
        yield
    finally:
        await pool.close()


def create_app(service: Optional[RoundService] = None) -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Golf Round Ledger API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.round_service = service

    origins = os.environ.get("CORS_ORIGINS", "http://localhost:5173")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routers import extract, rounds, stats
    app.include_router(extract.router, prefix="/api/extract", tags=["extract"])
    app.include_router(rounds.router, prefix="/api/rounds", tags=["rounds"])
    app.include_router(stats.router, prefix="/api/stats", tags=["stats"])

    @app.get("/api/health")
    async def health():
        pool = getattr(app.state, "pool", None)
        if pool is None:
            return {"status": "ok", "database": None}
        healthy = await pool.health_check()
        return {"status": "ok" if healthy else "degraded", "database": healthy}

    return app


app = create_app()
