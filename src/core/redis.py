"""Async Redis client used for rate limiting; every failure degrades to 'no Redis'."""
import logging
from typing import Any

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import NoScriptError, RedisError

logger = logging.getLogger(__name__)

# Per-minute limits: sorted set of request timestamps trimmed to the window.
# Returns {allowed, remaining, retry_after}.
SLIDING_WINDOW_SCRIPT = """
local key = KEYS[1]
local now = tonumber(ARGV[1])
local window = tonumber(ARGV[2])
local limit = tonumber(ARGV[3])
local request_id = ARGV[4]

redis.call('ZREMRANGEBYSCORE', key, 0, now - window)
local count = redis.call('ZCARD', key)

if count < limit then
    redis.call('ZADD', key, now, now .. ':' .. request_id)
    redis.call('EXPIRE', key, window)
    return {1, limit - count - 1, 0}
end

local oldest = redis.call('ZRANGE', key, 0, 0, 'WITHSCORES')
local retry_after = 0
if oldest and oldest[2] then
    retry_after = math.ceil((oldest[2] + window) - now)
end
return {0, 0, retry_after}
"""

# Daily limits: counter that expires with the window.
# Returns {allowed, remaining, ttl, retry_after}.
FIXED_WINDOW_SCRIPT = """
local key = KEYS[1]
local limit = tonumber(ARGV[1])
local window = tonumber(ARGV[2])

local count = redis.call('INCR', key)
if count == 1 then
    redis.call('EXPIRE', key, window)
end
local ttl = redis.call('TTL', key)

if count <= limit then
    return {1, limit - count, ttl, 0}
end
return {0, 0, ttl, ttl}
"""


class RedisClient:
    """Pooled async Redis connection with preloaded rate limit scripts."""

    def __init__(self, url: str, enabled: bool = True, pool_size: int = 20) -> None:
        self._url = url
        self._enabled = enabled
        self._pool_size = pool_size
        self._client: Redis | None = None
        self._script_shas: dict[str, str] = {}

    async def connect(self) -> None:
        """Open the pool and load the Lua scripts; stays disconnected on failure."""
        if not self._enabled:
            logger.info("Redis disabled by configuration")
            return
        try:
            pool = ConnectionPool.from_url(self._url, max_connections=self._pool_size)
            self._client = Redis(connection_pool=pool)
            await self._client.ping()
            await self._load_scripts()
            logger.info("Redis connected")
        except RedisError as e:
            logger.warning("redis_unavailable", extra={"operation": "connect", "error": str(e)})
            self._client = None

    async def _load_scripts(self) -> None:
        if not self._client:
            return
        try:
            self._script_shas = {
                "sliding": await self._client.script_load(SLIDING_WINDOW_SCRIPT),
                "fixed": await self._client.script_load(FIXED_WINDOW_SCRIPT),
            }
        except RedisError as e:
            logger.warning("Failed to load Lua scripts: %s", e)
            self._script_shas = {}

    async def close(self) -> None:
        """Close the connection pool."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Redis connection closed")

    @property
    def is_connected(self) -> bool:
        """Whether a connection was established."""
        return self._client is not None

    async def ping(self) -> bool:
        """True if Redis answers."""
        if not self._client:
            return False
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def _run_script(self, name: str, *args: Any) -> list[int] | None:
        """
        Run a preloaded script with one key.

        Reloads the scripts once if Redis lost them (e.g. after a restart).
        Returns None whenever Redis cannot answer.
        """
        sha = self._script_shas.get(name)
        if not self._client or sha is None:
            return None
        try:
            return await self._client.evalsha(sha, 1, *args)
        except NoScriptError:
            logger.warning("redis_script_reload", extra={"script": name})
            await self._load_scripts()
            sha = self._script_shas.get(name)
            if sha is None:
                return None
            try:
                return await self._client.evalsha(sha, 1, *args)
            except RedisError as e:
                logger.warning("Redis %s window retry failed: %s", name, e)
                return None
        except RedisError as e:
            logger.warning("Redis %s window failed: %s", name, e)
            return None

    async def eval_sliding_window(
        self,
        key: str,
        now: int,
        window_seconds: int,
        max_requests: int,
        request_id: str,
    ) -> list[int] | None:
        """[allowed, remaining, retry_after] for one request, or None without Redis."""
        return await self._run_script(
            "sliding", key, now, window_seconds, max_requests, request_id,
        )

    async def eval_fixed_window(
        self,
        key: str,
        max_requests: int,
        window_seconds: int,
    ) -> list[int] | None:
        """[allowed, remaining, ttl, retry_after] for one request, or None without Redis."""
        return await self._run_script("fixed", key, max_requests, window_seconds)


class _RedisState:
    """Holder for the process-wide client set up by the app lifespan."""

    client: RedisClient | None = None


_state = _RedisState()


def get_redis_client() -> RedisClient | None:
    """The process-wide Redis client, if the app has started one."""
    return _state.client


def set_redis_client(client: RedisClient | None) -> None:
    """Install (or clear) the process-wide Redis client."""
    _state.client = client
