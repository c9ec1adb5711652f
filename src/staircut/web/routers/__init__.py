"""API routers for the REST API."""

from staircut.web.routers.optimize import router as optimize_router

__all__ = ["optimize_router"]
