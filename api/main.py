"""
linebasic API - FastAPI Application

Run with: uvicorn api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from linebasic import __version__
from api.routes.run import router as run_router
from api.routes.validate import router as validate_router
from api.routes.health import router as health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("linebasic API starting...")
    yield
    # Shutdown
    logger.info("linebasic API shutting down...")


app = FastAPI(
    title="linebasic API",
    description="Run and check line-numbered BASIC programs",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(run_router, prefix="/api/v1", tags=["Execution"])
app.include_router(validate_router, prefix="/api/v1", tags=["Validation"])


@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "name": "linebasic API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
