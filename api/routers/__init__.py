"""
Router package for the Workout Session API.

This package contains all API routers organized by domain:
- health: Health check endpoint
- sessions: Session lifecycle and exercise set logging
- progress: Progress overview and per-exercise analytics
"""

from api.routers.health import router as health_router
from api.routers.sessions import router as sessions_router
from api.routers.progress import router as progress_router

__all__ = [
    "health_router",
    "sessions_router",
    "progress_router",
]
