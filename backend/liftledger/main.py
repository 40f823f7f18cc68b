"""
LiftLedger Backend - FastAPI Application
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from liftledger.core.config import settings
from liftledger.core.logging import setup_logging, get_logger
from liftledger.api import analytics, leaderboards

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    logger.info("Starting LiftLedger Backend", version="1.0.0", timezone=settings.TIMEZONE)

    yield

    # Shutdown
    logger.info("Shutting down LiftLedger Backend")


app = FastAPI(
    title="LiftLedger API",
    description="Workout analytics, personal records and friend leaderboards",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(analytics.router, prefix="/api/analytics", tags=["analytics"])
app.include_router(leaderboards.router, prefix="/api/leaderboards", tags=["leaderboards"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "liftledger-backend"}
