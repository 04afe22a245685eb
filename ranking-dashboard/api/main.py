"""
Client Ranking Dashboard API - Main Application.

FastAPI application with CORS enabled for frontend communication.
"""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import __version__

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create FastAPI application
app = FastAPI(
    title="Client Ranking Dashboard API",
    description="Register sales and serve the top clients leaderboard",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS - Allow all origins for development
# TODO: Restrict origins to the deployed front-end domain
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["Health"])
def health_check():
    """
    Health check endpoint.

    Returns the API status and version.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "service": "ranking-dashboard-api"
    }


@app.get("/", tags=["Root"])
def root():
    """
    Root endpoint with API information.
    """
    return {
        "message": "Client Ranking Dashboard API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }


# Import and include routers
from api.routers import admin, contacts, notice, ranking, sales  # noqa: E402

app.include_router(ranking.router, prefix="/api/v1", tags=["Ranking"])
app.include_router(notice.router, prefix="/api/v1", tags=["Notice"])
app.include_router(contacts.router, prefix="/api/v1", tags=["Contacts"])
app.include_router(admin.router, prefix="/api/v1", tags=["Admin"])
app.include_router(sales.router, prefix="/api/v1", tags=["Sales"])
