"""Admin domain - Turf approval and platform statistics"""

from .router import router

__all__ = ["router"]
