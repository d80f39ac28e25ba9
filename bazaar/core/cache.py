"""Redis caching."""
import hashlib
import json
import logging
import uuid
from typing import Any, Optional

import redis.asyncio as redis

from bazaar.config import settings

logger = logging.getLogger(__name__)

BUSINESS_CACHE_PATTERN = "businesses:*"


class CacheService:
    """Redis cache. Every operation degrades to a no-op when Redis is unavailable."""

    def __init__(self):
        self._redis: Optional[redis.Redis] = None

    async def connect(self):
        """Connect to Redis."""
        if not settings.cache_enabled or self._redis:
            return
        try:
            self._redis = redis.from_url(
                settings.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            await self._redis.ping()
        except Exception as e:
            logger.warning(f"Redis unavailable, running without cache: {e}")
            self._redis = None

    async def disconnect(self):
        """Disconnect from Redis."""
        if self._redis:
            await self._redis.close()
            self._redis = None

    async def _client(self) -> Optional[redis.Redis]:
        if not settings.cache_enabled:
            return None
        if not self._redis:
            await self.connect()
        return self._redis

    async def get(self, key: str) -> Any | None:
        """Get a value from the cache."""
        client = await self._client()
        if not client:
            return None
        try:
            value = await client.get(key)
            if value:
                return json.loads(value)
            return None
        except Exception:
            return None

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store a value in the cache."""
        client = await self._client()
        if not client:
            return False
        try:
            serialized = json.dumps(value, default=str)
            await client.setex(key, ttl or settings.cache_ttl_seconds, serialized)
            return True
        except Exception:
            return False

    async def delete(self, key: str) -> bool:
        """Delete a value from the cache."""
        client = await self._client()
        if not client:
            return False
        try:
            await client.delete(key)
            return True
        except Exception:
            return False

    async def delete_pattern(self, pattern: str) -> int:
        """Delete every key matching the pattern."""
        client = await self._client()
        if not client:
            return 0
        try:
            keys = [key async for key in client.scan_iter(match=pattern)]
            if keys:
                return await client.delete(*keys)
            return 0
        except Exception:
            return 0

    async def invalidate_businesses(self) -> int:
        """Drop every cached business list, detail and featured entry."""
        return await self.delete_pattern(BUSINESS_CACHE_PATTERN)


cache_service = CacheService()


def _viewer_part(viewer_id: uuid.UUID | None) -> str:
    return str(viewer_id) if viewer_id else "anon"


def get_cache_key_business_list(viewer_id: uuid.UUID | None, filters: dict) -> str:
    """Cache key for a business listing query."""
    digest = hashlib.sha1(
        json.dumps(filters, sort_keys=True, default=str).encode("utf-8")
    ).hexdigest()
    return f"businesses:list:{_viewer_part(viewer_id)}:{digest}"


def get_cache_key_business_detail(business_id: uuid.UUID, viewer_id: uuid.UUID | None) -> str:
    """Cache key for a business detail."""
    return f"businesses:detail:{business_id}:{_viewer_part(viewer_id)}"


def get_cache_key_featured(viewer_id: uuid.UUID | None) -> str:
    """Cache key for the featured listing."""
    return f"businesses:featured:{_viewer_part(viewer_id)}"


def get_cache_key_categories() -> str:
    return "categories:all"


def get_cache_key_locations() -> str:
    return "locations:all"


def get_cache_key_site_settings() -> str:
    return "site_settings:all"
