"""FastAPI application for the confess moderation service.

Provides REST API endpoints wrapping the confess package for:
- Scanning posts and comments (keyword + PII scan, verdict)
- Inspecting the active moderation policy
- Crisis resources shown alongside self-harm escalations
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Ensure the confess package is importable by adding the project root to sys.path.
_project_root = str(Path(__file__).resolve().parents[3])
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from confess import __version__
from web.backend.app.routers import moderation

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="confess API",
    description=(
        "REST API for the CampusConfess moderation engine. "
        "Scans posts and comments for banned keywords and personal "
        "information and returns a moderation verdict."
    ),
    version=__version__,
)

# ---------------------------------------------------------------------------
# CORS middleware (the mobile client calls this service directly)
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Include routers
# ---------------------------------------------------------------------------
app.include_router(moderation.router)


# ---------------------------------------------------------------------------
# Root and health-check endpoints
# ---------------------------------------------------------------------------


@app.get("/", tags=["meta"])
async def root():
    """Return basic API information."""
    return {
        "name": "confess API",
        "version": __version__,
        "description": "CampusConfess content moderation REST API",
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


@app.get("/health", tags=["meta"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
