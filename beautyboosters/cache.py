"""
Redis caching for third-party lookups (address autocomplete, CVR).
A missing Redis means every call goes upstream.
"""

import json
import logging
from typing import Any, Optional

from .rate_limiter import get_redis_client

logger = logging.getLogger(__name__)


class Cache:
    """Redis cache wrapper with JSON serialization"""

    def __init__(self, prefix: str):
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    def _get_client(self):
        try:
            return get_redis_client()
        except Exception as e:
            logger.debug(f"Redis cache unavailable: {e}")
            return None

    def get(self, key: str) -> Optional[Any]:
        client = self._get_client()
        if not client:
            return None
        try:
            value = client.get(self._key(key))
            if value:
                logger.debug(f"✅ Cache HIT: {key}")
                return json.loads(value)
            return None
        except Exception as e:
            logger.warning(f"Redis cache read error for {key}: {e}")
            return None

    def set(self, key: str, value: Any, ttl: int = 3600) -> bool:
        client = self._get_client()
        if not client:
            return False
        try:
            client.setex(self._key(key), ttl, json.dumps(value, default=str))
            return True
        except Exception as e:
            logger.warning(f"Redis cache write error for {key}: {e}")
            return False


address_cache = Cache("address")
cvr_cache = Cache("cvr")
