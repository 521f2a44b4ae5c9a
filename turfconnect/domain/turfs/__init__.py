"""Turfs domain - Listings, owner turf management and claims"""

from .router import router

__all__ = ["router"]
