"""Jobs domain - admin-created jobs, booster applications, earnings and job chat"""

from .router import router

__all__ = ["router"]
