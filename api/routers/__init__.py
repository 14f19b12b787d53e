"""
Router package for the workout session API.

This package contains all API routers organized by domain:
- health: Health check endpoint
- sessions: Session lifecycle (complete, abort) and queries
- records: Personal record reads
- progress: Progress time-series reads
"""

from api.routers.health import router as health_router
from api.routers.progress import router as progress_router
from api.routers.records import router as records_router
from api.routers.sessions import router as sessions_router

__all__ = [
    "health_router",
    "sessions_router",
    "records_router",
    "progress_router",
]
