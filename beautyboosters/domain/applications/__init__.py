"""Applications domain - booster signup applications and admin approval"""

from .router import router

__all__ = ["router"]
