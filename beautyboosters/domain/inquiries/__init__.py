"""Inquiries domain - business inquiry form"""

from .router import router

__all__ = ["router"]
