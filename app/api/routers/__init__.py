"""
app/api/routers package marker.
"""

from app.api.routers.reports import router as reports_router

__all__ = [
    "reports_router",
]
