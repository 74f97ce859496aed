"""Bookings domain - slots, booking lifecycle, released bookings and reviews"""

from .router import router

__all__ = ["router"]
