"""FastAPI application."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from listing_qa import __version__
from listing_qa.api.routers import audit
from listing_qa.config import get_settings
from listing_qa.qa.registry import get_default_registry

settings = get_settings()

logging.basicConfig(level=settings.log_level.upper())

# Build and check the marketplace profiles at startup
get_default_registry()

app = FastAPI(
    title="listing-qa API",
    description="Marketplace-aware listing quality audits",
    version=__version__,
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(audit.router, prefix=settings.api_prefix)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
