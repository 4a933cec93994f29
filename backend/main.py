"""
Menu Translation Backend - FastAPI Application

Provides API endpoints for:
- Document translation (streamed, multi-provider, incremental)
- Language file storage (i18n JSON documents)
- API key management
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from routers import i18n, keys, translate
from routers.keys import configured_credentials

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    print(f"🚀 Starting Menu Translation Backend v1.0.0")
    print(f"📍 API docs available at: http://localhost:8000/docs")
    yield
    # Shutdown
    print("👋 Shutting down backend...")


app = FastAPI(
    title="Menu Translation API",
    description="Backend API for incremental, multi-provider translation of language files",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware for the admin panel
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(translate.router, prefix="/api/translate", tags=["Translation"])
app.include_router(i18n.router, prefix="/api/i18n", tags=["Language Files"])
app.include_router(keys.router, prefix="/api/keys", tags=["API Keys"])


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": "Menu Translation Backend",
        "version": "1.0.0"
    }


@app.get("/health")
async def health_check():
    """Detailed health check."""
    credentials = configured_credentials(settings)
    return {
        "status": "healthy",
        "providers_configured": sorted(credentials),
        "i18n_dir": settings.i18n_dir
    }
