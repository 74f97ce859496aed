"""Catalog domain - Services offered on the marketplace and cart pricing"""

from .router import router

__all__ = ["router"]
