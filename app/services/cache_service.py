"""
Cache service for paginated catalog listings.
Values are stored in Redis as JSON with a TTL; analytics results are never cached.
"""
import json
import logging
from datetime import date, datetime
from typing import Any, Optional

import redis

from app.config import settings

# Default cache settings
DEFAULT_CACHE_TTL = 300  # 5 minutes in seconds

logger = logging.getLogger(__name__)


def _json_serializer(value: Any) -> Any:
    """Serialize types the json module does not handle."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if hasattr(value, "model_dump") and callable(getattr(value, "model_dump")):
        return value.model_dump(mode="json", by_alias=True)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class CacheService:
    """
    Service for caching data in Redis with TTL (Time-To-Live).
    Every operation is a no-op when Redis is not configured or unreachable.
    """
    def __init__(self, redis_url: Optional[str] = None):
        self.debug = settings.CACHE_DEBUG
        self.redis_client = None
        self.enabled = False

        if not redis_url:
            logger.warning("Redis URL not provided, listing cache will be disabled")
            return

        try:
            self.redis_client = redis.from_url(redis_url)
            self.enabled = True
            logger.info("Redis cache initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize Redis client: {e}")

    def get(self, key: str) -> Optional[Any]:
        """
        Get a value from the cache by key.
        Returns None if the key does not exist or cache is disabled.
        """
        if not self.enabled:
            return None

        try:
            value = self.redis_client.get(key)
        except redis.RedisError as e:
            logger.error(f"Error reading from cache: {e}")
            return None

        if value is None:
            if self.debug:
                logger.info(f"CACHE MISS: {key}")
            return None

        if self.debug:
            logger.info(f"CACHE HIT: {key}")
        return json.loads(value)

    def set(self, key: str, value: Any, ttl_seconds: int = DEFAULT_CACHE_TTL) -> bool:
        """
        Set a value in the cache with a TTL.
        Returns True on success, False on failure or if cache is disabled.
        """
        if not self.enabled:
            return False

        try:
            serialized = json.dumps(value, default=_json_serializer)
            result = bool(self.redis_client.setex(key, ttl_seconds, serialized))
        except (redis.RedisError, TypeError) as e:
            logger.error(f"Error writing to cache: {e}")
            return False

        if self.debug:
            logger.info(f"Cached key: {key}, size: {len(serialized)} bytes, TTL: {ttl_seconds}s")
        return result

    def delete_pattern(self, pattern: str) -> bool:
        """
        Delete keys matching a pattern.
        Returns True if any keys were deleted, False otherwise.
        """
        if not self.enabled:
            return False

        try:
            keys = list(self.redis_client.scan_iter(match=pattern))
            if not keys:
                return False
            self.redis_client.delete(*keys)
        except redis.RedisError as e:
            logger.error(f"Error deleting pattern from cache: {e}")
            return False

        if self.debug:
            logger.info(f"Deleted {len(keys)} keys matching pattern: {pattern}")
        return True


# Create a singleton instance of the cache service
cache_service = CacheService(settings.REDIS_URL)
