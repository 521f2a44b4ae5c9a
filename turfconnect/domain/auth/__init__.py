"""Auth domain - Registration flow, sign-in and session routing"""

from .router import router

__all__ = ["router"]
