"""Slots domain - Weekly availability slots and presets"""

from .router import router

__all__ = ["router"]
