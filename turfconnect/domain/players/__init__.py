"""Players domain - Player profiles, phone verification and player search"""

from .router import router

__all__ = ["router"]
