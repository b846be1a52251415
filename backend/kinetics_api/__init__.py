"""
Swing Kinetics API Module

FastAPI routes for swing kinetics scoring.
"""

from .routes import router

__all__ = [
    "router",
]
