"""Cache manager implementation using Redis."""

import logging
import json
from typing import Any, Optional, Dict, List
import redis

from ..config import settings

logger = logging.getLogger(__name__)

KEY_PREFIX = "daily_connections"


class CacheManager:
    """Redis-based cache for published puzzles and corpus snapshots.

    Every Redis failure is logged and reported as a miss so that callers fall
    back to the underlying puzzle store.
    """

    def __init__(self, redis_url: str = None, redis_client: Optional[redis.Redis] = None):
        """Initialize Redis connection."""
        self.redis_url = redis_url or settings.redis_url
        self.redis_client = redis_client or redis.from_url(self.redis_url, decode_responses=True)
        self.default_ttl = settings.cache_ttl_seconds

    def _key(self, *parts: Any) -> str:
        return ":".join([KEY_PREFIX] + [str(part) for part in parts])

    def set_json(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """Set a JSON-serializable value in the cache."""
        try:
            ttl = ttl or self.default_ttl
            json_value = json.dumps(value, ensure_ascii=False)
            result = self.redis_client.setex(key, ttl, json_value)
            return bool(result)

        except Exception as e:
            logger.error(f"Error setting JSON cache key {key}: {e}")
            return False

    def get_json(self, key: str) -> Optional[Any]:
        """Get a JSON value from the cache."""
        try:
            json_value = self.redis_client.get(key)

            if json_value is None:
                return None

            # Decode if bytes
            if isinstance(json_value, bytes):
                json_value = json_value.decode('utf-8')

            return json.loads(json_value)

        except Exception as e:
            logger.error(f"Error getting JSON cache key {key}: {e}")
            return None

    def cache_puzzle(self, date: str, puzzle_data: Dict[str, Any], ttl: Optional[int] = None) -> bool:
        """Cache a published puzzle by date."""
        return self.set_json(self._key("puzzle", date), puzzle_data, ttl)

    def get_cached_puzzle(self, date: str) -> Optional[Dict[str, Any]]:
        """Get a cached puzzle by date."""
        return self.get_json(self._key("puzzle", date))

    def cache_corpus(self, limit: int, puzzles: List[Dict[str, Any]], ttl: Optional[int] = None) -> bool:
        """Cache the recent-corpus snapshot fetched with ``limit``."""
        return self.set_json(self._key("corpus", limit), {"puzzles": puzzles}, ttl)

    def get_cached_corpus(self, limit: int) -> Optional[List[Dict[str, Any]]]:
        """Get a cached recent-corpus snapshot."""
        result = self.get_json(self._key("corpus", limit))
        return result.get("puzzles") if result else None

    def invalidate_corpus(self) -> int:
        """Drop every cached corpus snapshot."""
        return self.invalidate_pattern(self._key("corpus", "*"))

    def invalidate_pattern(self, pattern: str) -> int:
        """Invalidate all keys matching a pattern."""
        try:
            keys = list(self.redis_client.scan_iter(match=pattern))
            if keys:
                return self.redis_client.delete(*keys)
            return 0

        except Exception as e:
            logger.error(f"Error invalidating pattern {pattern}: {e}")
            return 0

    def get_cache_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        try:
            info = self.redis_client.info()

            stats = {
                "total_keys": self.redis_client.dbsize(),
                "memory_used": info.get("used_memory_human", "N/A"),
                "connected_clients": info.get("connected_clients", 0),
                "keyspace_hits": info.get("keyspace_hits", 0),
                "keyspace_misses": info.get("keyspace_misses", 0),
            }

            # Calculate hit rate
            hits = stats["keyspace_hits"]
            misses = stats["keyspace_misses"]
            total = hits + misses
            if total > 0:
                stats["hit_rate"] = hits / total
            else:
                stats["hit_rate"] = 0.0

            return stats

        except Exception as e:
            logger.error(f"Error getting cache stats: {e}")
            return {}

    def clear_all(self) -> bool:
        """Clear every key written by this service."""
        pattern = self._key("*")
        try:
            keys = list(self.redis_client.scan_iter(match=pattern))
            if keys:
                self.redis_client.delete(*keys)
            return True
        except Exception as e:
            logger.error(f"Error clearing cache: {e}")
            return False

    def health_check(self) -> bool:
        """Check if Redis connection is healthy."""
        try:
            self.redis_client.ping()
            return True
        except Exception as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    def close(self):
        """Close Redis connection."""
        try:
            self.redis_client.close()
        except Exception as e:
            logger.error(f"Error closing Redis connection: {e}")
