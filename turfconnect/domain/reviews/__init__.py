"""Reviews domain - Turf ratings and comments"""

from .router import router

__all__ = ["router"]
