"""
Redis caching utilities for frequently read listings
Turf listings, slot grids and review lists are cached and invalidated on writes
"""
import json
import logging
from typing import Any, Optional

from .rate_limiter import get_redis_client

logger = logging.getLogger(__name__)


class Cache:
    """Redis cache wrapper with automatic serialization"""

    def __init__(self):
        self.redis_client = None

    def _get_client(self):
        """Lazy load Redis client"""
        if self.redis_client is None:
            try:
                self.redis_client = get_redis_client()
            except Exception as e:
                logger.warning(f"⚠️ Redis cache unavailable: {e}")
                return None
        return self.redis_client

    def get(self, key: str) -> Optional[Any]:
        """Get value from cache"""
        client = self._get_client()
        if not client:
            return None

        try:
            value = client.get(key)
            if value:
                logger.debug(f"✅ Cache HIT: {key}")
                return json.loads(value)
            logger.debug(f"❌ Cache MISS: {key}")
            return None
        except Exception as e:
            logger.error(f"❌ Cache get error for {key}: {e}")
            return None

    def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Set value in cache with TTL (default 5 minutes)"""
        client = self._get_client()
        if not client:
            return False

        try:
            client.setex(key, ttl, json.dumps(value, default=str))
            logger.debug(f"✅ Cache SET: {key} (TTL: {ttl}s)")
            return True
        except Exception as e:
            logger.error(f"❌ Cache set error for {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        client = self._get_client()
        if not client:
            return False

        try:
            client.delete(key)
            logger.debug(f"✅ Cache DELETE: {key}")
            return True
        except Exception as e:
            logger.error(f"❌ Cache delete error for {key}: {e}")
            return False

    def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching pattern (e.g., 'turf_slots:abc:*')"""
        client = self._get_client()
        if not client:
            return 0

        try:
            keys = client.keys(pattern)
            if keys:
                deleted = client.delete(*keys)
                logger.debug(f"✅ Cache DELETE pattern: {pattern} ({deleted} keys)")
                return deleted
            return 0
        except Exception as e:
            logger.error(f"❌ Cache delete pattern error for {pattern}: {e}")
            return 0


# Global cache instance
cache = Cache()


# Cache key builders


def build_turf_list_key(area: Optional[str] = None, sport: Optional[str] = None, search: Optional[str] = None) -> str:
    return f"turfs:active:{(area or 'all').lower()}:{(sport or 'all').lower()}:{(search or '').lower()}"


def build_slot_list_key(turf_id: str) -> str:
    return f"turf_slots:{turf_id}:available"


def build_review_list_key(turf_id: str) -> str:
    return f"reviews:{turf_id}"


def invalidate_turf_listings() -> int:
    """Drop every cached active-turf listing after a turf changes"""
    return cache.delete_pattern("turfs:active:*")


def invalidate_turf_slots(turf_id: str) -> bool:
    return cache.delete(build_slot_list_key(turf_id))


def invalidate_turf_reviews(turf_id: str) -> bool:
    return cache.delete(build_review_list_key(turf_id))
