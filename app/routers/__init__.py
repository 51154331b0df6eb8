"""
API Routers
Separate router modules for each domain.
"""

from app.routers import packager

__all__ = ["packager"]
