"""
FastAPI application for the story frame service.

This module sets up the main FastAPI app with routes, middleware,
and configuration.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storytram import __version__
from storytram.config import config
from storytram.routes.story_frames import router as story_frames_router
from storytram.utils.logging import configure_logging

configure_logging()

app = FastAPI(
    title="Story Frame API",
    description="Deterministic silent cinematic story frames from reusable templates",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(story_frames_router)


@app.get("/api")
async def api_info():
    """API information endpoint."""
    return {
        "name": "Story Frame API",
        "version": __version__,
        "status": "operational",
        "docs": "/docs",
        "endpoints": {
            "story_types": "GET /api/story-frames/types",
            "generate": "POST /api/story-frames",
            "warnings": "GET /api/story-frames/warnings",
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint - must be fast and reliable."""
    return {"status": "healthy", "version": __version__}
