"""
API Routers for the image transform service
"""

from api.routers import transform

__all__ = ["transform"]
