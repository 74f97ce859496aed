"""Messaging domain - support conversations between users and admins"""

from .router import router

__all__ = ["router"]
