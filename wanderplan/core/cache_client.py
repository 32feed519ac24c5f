"""
Redis cache client for the Wanderplan backend.

Lookups against third-party APIs (city search, weather) are cached as JSON.
The cache is strictly best-effort: when Redis is disabled, unreachable or
failing, every read is a miss and every write is a no-op.
"""

import asyncio
import json
import logging
from typing import Any, Optional

from redis import asyncio as aioredis
from redis.asyncio import Redis

from wanderplan.config import get_settings


class CacheClient:
    """Redis cache client with connection management and graceful degradation."""

    def __init__(self, redis_url: Optional[str] = None, enabled: Optional[bool] = None):
        redis_settings = get_settings().redis
        self.redis_url = redis_url or redis_settings.url
        self.enabled = redis_settings.enabled if enabled is None else enabled
        self.socket_timeout = redis_settings.socket_timeout
        self.redis_client: Optional[Redis] = None
        self.logger = logging.getLogger(__name__)
        self._connection_lock = asyncio.Lock()
        self._is_connected = False
        self._connection_retries = 0
        self._max_retries = 3

    async def connect(self) -> bool:
        """
        Establish connection to Redis server.

        Returns:
            True if connection successful, False otherwise
        """
        if not self.enabled:
            return False

        async with self._connection_lock:
            if self._is_connected and self.redis_client:
                return True

            try:
                self.logger.info(f"Connecting to Redis at {self.redis_url}")
                self.redis_client = aioredis.from_url(
                    self.redis_url,
                    encoding="utf-8",
                    decode_responses=True,
                    socket_timeout=self.socket_timeout,
                    socket_connect_timeout=self.socket_timeout,
                )
                await self.redis_client.ping()
                self._is_connected = True
                self._connection_retries = 0
                self.logger.info("Successfully connected to Redis")
                return True

            except Exception as e:
                self._connection_retries += 1
                self.logger.error(
                    f"Failed to connect to Redis (attempt {self._connection_retries}): {str(e)}"
                )
                await self._drop_client()
                return False

    async def disconnect(self) -> None:
        """Disconnect from Redis server."""
        async with self._connection_lock:
            if self.redis_client:
                await self._drop_client()
                self.logger.info("Disconnected from Redis")

    async def get(self, key: str) -> Optional[str]:
        if not await self._ensure_connection():
            return None

        try:
            value = await self.redis_client.get(key)
            self.logger.debug(f"Cache {'hit' if value else 'miss'} for key: {key}")
            return value
        except Exception as e:
            self.logger.warning(f"Error getting cache key '{key}': {str(e)}")
            await self._drop_client()
            return None

    async def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> bool:
        if not await self._ensure_connection():
            return False

        try:
            if ttl_seconds:
                result = await self.redis_client.setex(key, ttl_seconds, value)
            else:
                result = await self.redis_client.set(key, value)
            return bool(result)
        except Exception as e:
            self.logger.warning(f"Error setting cache key '{key}': {str(e)}")
            await self._drop_client()
            return False

    async def get_json(self, key: str) -> Optional[Any]:
        raw = await self.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            self.logger.warning(f"Discarding undecodable cache entry '{key}'")
            return None

    async def set_json(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> bool:
        return await self.set(key, json.dumps(value, default=str), ttl_seconds)

    async def ping(self) -> bool:
        if not await self._ensure_connection():
            return False
        try:
            return await self.redis_client.ping() is True
        except Exception as e:
            self.logger.warning(f"Redis ping failed: {str(e)}")
            await self._drop_client()
            return False

    async def _ensure_connection(self) -> bool:
        if not self.enabled:
            return False
        if self._is_connected and self.redis_client:
            return True
        if self._connection_retries >= self._max_retries:
            return False
        return await self.connect()

    async def _drop_client(self) -> None:
        self._is_connected = False
        client, self.redis_client = self.redis_client, None
        if client is not None:
            try:
                await client.aclose()
            except Exception as e:
                self.logger.debug(f"Ignoring error while closing Redis client: {e}")

