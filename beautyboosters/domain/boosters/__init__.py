"""Boosters domain - booster directory, profiles, availability and competence tags"""

from .router import router

__all__ = ["router"]
