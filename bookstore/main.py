import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookstore.core.ai import build_ai_client
from bookstore.core.config import config
from bookstore.core.db.engine import AsyncSessionLocal, check_database_connection, engine
from bookstore.core.error_handler import register_exception_handlers
# Load every mapped table before the first query
from bookstore import models  # noqa: F401
from bookstore.modules.dashboard import DashboardService
from bookstore.modules.dashboard import router as dashboard_router

# Configure logging to output to console
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Bookstore Dashboard API...")
    app.state.dashboard_service = DashboardService(
        AsyncSessionLocal, max_concurrency=config.dashboard_query_concurrency
    )
    app.state.ai_client = build_ai_client(config)
    if app.state.ai_client is None:
        logger.warning("GEMINI_API_KEY is not set, AI analysis is disabled")

    yield

    if app.state.ai_client is not None:
        await app.state.ai_client.close()
    await engine.dispose()
    logger.info("Bookstore Dashboard API stopped")


app = FastAPI(
    title="Bookstore Dashboard API",
    description="Sales figures and AI business analysis for the bookstore admin dashboard",
    version="1.0.0",
    lifespan=lifespan,
)

register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(dashboard_router, prefix="/api")


@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "database": await check_database_connection()}
