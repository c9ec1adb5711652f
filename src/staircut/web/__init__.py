"""FastAPI REST API for staircase cutting optimization.

This module provides a REST API for planning plank purchases from a
project document.

Usage:
    uvicorn staircut.web:app --reload
"""

from staircut.web.app import app, create_app

__all__ = ["app", "create_app"]
