# src/threadline/main.py
"""Main entry point for the Threadline application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from threadline import __version__
from threadline.api.error_handlers import register_error_handlers
from threadline.api.v1 import comments_router, posts_router, users_router
from threadline.core.logging import setup_logging
from threadline.core.settings import settings
from threadline.db.session import Database

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Threadline API",
    description="Forum API with registered and anonymous participation",
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

register_error_handlers(app)

# Include API routers
app.include_router(posts_router, prefix="/api/v1")
app.include_router(comments_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    setup_logging(settings.log_level, settings.log_format)
    database = Database(settings.effective_database_url, echo=settings.sql_debug)
    if settings.create_tables_on_startup:
        database.create_tables()
    app.state.database = database
    logger.info("Storage opened")


@app.on_event("shutdown")
async def on_shutdown() -> None:
    database: Database | None = getattr(app.state, "database", None)
    if database is not None:
        database.close()
        app.state.database = None
        logger.info("Storage closed")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Threadline API",
        "version": __version__,
        "description": "Forum API with registered and anonymous participation",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("threadline.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
