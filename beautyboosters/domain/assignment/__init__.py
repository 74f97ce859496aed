"""Assignment domain - round-robin and manual booster assignment for cart lines"""

from .router import router

__all__ = ["router"]
