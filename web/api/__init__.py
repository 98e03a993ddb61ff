"""FastAPI backend for the Crazy Eights web UI."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import load_settings
from web.api.routes import games
from web.api.session_manager import session_manager

logger = logging.getLogger(__name__)

settings = load_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Apply settings on startup; cancel pending computer moves on shutdown."""
    session_manager.think_delay = settings.think_delay
    session_manager.strategy_name = settings.strategy
    logger.info(
        "Crazy Eights API starting (think_delay=%dms, strategy=%s)",
        settings.think_delay_ms,
        settings.strategy,
    )
    yield
    session_manager.shutdown()
    logger.info("Crazy Eights API stopped")


app = FastAPI(
    title="Crazy Eights API",
    description="Play Crazy Eights against the computer",
    version="0.1.0",
    lifespan=lifespan,
)

logger.info("CORS origins configured: %s", settings.cors_origins)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(games.router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
