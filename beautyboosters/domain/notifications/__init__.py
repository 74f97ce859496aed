"""Notifications domain - stored in-app notifications for boosters and admins"""

from .router import router

__all__ = ["router"]
