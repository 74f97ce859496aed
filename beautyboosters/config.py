import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./beautyboosters.db")

# Hosted auth provider - tokens are HS256 signed with the project JWT secret
SUPABASE_JWT_SECRET = os.getenv("SUPABASE_JWT_SECRET")
if not SUPABASE_JWT_SECRET:
    import warnings

    warnings.warn(
        "SUPABASE_JWT_SECRET not set! Using insecure default - DO NOT USE IN PRODUCTION",
        RuntimeWarning,
        stacklevel=2,
    )
    SUPABASE_JWT_SECRET = "INSECURE-DEV-SECRET-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only
JWT_ALGORITHM = "HS256"
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "authenticated")

# Frontend base URL for redirects and CSP
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:8080")

# Marketplace defaults
DEFAULT_BOOSTER_HOURLY_RATE = float(os.getenv("DEFAULT_BOOSTER_HOURLY_RATE", "500"))
DEFAULT_BOOSTER_LOCATION = os.getenv("DEFAULT_BOOSTER_LOCATION", "København")
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "DKK")
# Platform keeps 40% of the net price, booster gets the rest
PLATFORM_SHARE = float(os.getenv("PLATFORM_SHARE", "0.4"))
# 25% Danish VAT is 20% of a gross price
VAT_SHARE_OF_GROSS = float(os.getenv("VAT_SHARE_OF_GROSS", "0.2"))

# Released bookings: how many boosters get a direct request and for how long
BOOKING_REQUEST_TTL_HOURS = int(os.getenv("BOOKING_REQUEST_TTL_HOURS", "24"))
RELEASE_FANOUT_LIMIT = int(os.getenv("RELEASE_FANOUT_LIMIT", "5"))
# Hours before a confirmed booking the reminder row is due
BOOKING_REMINDER_LEAD_HOURS = int(os.getenv("BOOKING_REMINDER_LEAD_HOURS", "24"))

# Danish address API (DAWA / dataforsyningen)
ADDRESS_API_BASE_URL = os.getenv("ADDRESS_API_BASE_URL", "https://api.dataforsyningen.dk")
ADDRESS_CACHE_SECONDS = int(os.getenv("ADDRESS_CACHE_SECONDS", "3600"))

# Company registry lookup
CVR_API_BASE_URL = os.getenv("CVR_API_BASE_URL", "https://cvrapi.dk/api")
CVR_USER_AGENT = os.getenv("CVR_USER_AGENT", "BeautyBoosters/1.0")
CVR_CACHE_SECONDS = int(os.getenv("CVR_CACHE_SECONDS", "86400"))
