"""
FastAPI application entry point.
Briki insurance comparison API
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from briki import __version__
from briki.config import get_settings
from briki.api.routes import router
from briki.core.mongodb_client import close_mongodb_client


settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info("Starting Briki API...")
    logger.info(f"API Version: {__version__}")
    logger.info(f"Context store: {settings.context_store}")
    logger.info(f"RUNT mode: {'mock' if settings.use_mock_runt else 'real'}")

    yield

    # Shutdown
    logger.info("Shutting down Briki API...")
    close_mongodb_client()
    logger.info("Cleanup complete")


# Create FastAPI application
app = FastAPI(
    title="Briki API",
    description="""
    Insurance comparison for travel, auto, pet and health plans.

    ## Features

    - Filter plans by price, coverage, deductible, rating, provider, features and tags
    - Sort plans by price, rating, coverage, popularity or a recommendation score
    - Highlight best value, popular, premium and budget plans
    - Extract user context from Spanish chat messages
    - Look up Colombian vehicles in RUNT by license plate
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routes
app.include_router(router)


# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Briki API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "briki.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
