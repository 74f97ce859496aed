"""Salons domain - salon tenants with their own services, team, hours and bookings"""

from .router import router

__all__ = ["router"]
