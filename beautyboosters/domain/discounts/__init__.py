"""Discounts domain - discount codes, validation and redemption tracking"""

from .router import router

__all__ = ["router"]
