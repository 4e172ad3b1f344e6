"""
Nigeria Tax Engine - FastAPI Application Entry Point

This is the main entry point for the FastAPI application.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taxengine.config import settings
from taxengine.routers import categories, permissions, tax
from taxengine.utils.error_handling import setup_exception_handlers

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Environment: {settings.app_env}")
    if settings.permissions_strict:
        logger.info("Strict permission evaluation enabled")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}...")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Nigerian personal, company and withholding tax calculations, "
                "transaction categorisation and role-based settings permissions",
    version="0.1.0",
    docs_url="/api/docs" if settings.is_development else None,
    redoc_url="/api/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ===========================================
# GLOBAL ERROR HANDLERS
# ===========================================

setup_exception_handlers(app)


# ===========================================
# ROUTERS
# ===========================================

app.include_router(tax.router, prefix=f"{settings.api_prefix}/tax")
app.include_router(categories.router, prefix=f"{settings.api_prefix}/categories", tags=["Categories"])
app.include_router(permissions.router, prefix=f"{settings.api_prefix}/permissions", tags=["Permissions"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": "0.1.0",
    }


@app.get(settings.api_prefix)
async def api_root():
    """API root endpoint."""
    return {
        "message": f"Welcome to {settings.app_name} API {settings.api_version}",
        "endpoints": {
            "tax": f"{settings.api_prefix}/tax",
            "categories": f"{settings.api_prefix}/categories",
            "permissions": f"{settings.api_prefix}/permissions",
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
