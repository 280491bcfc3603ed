"""
Redis-backed rate limit enforcement.

Limits per auth/operation type are configured in rate_limit_config.py. When
Redis is unavailable every request is allowed.
"""
import logging
import time
import uuid
from uuid import UUID

from core.rate_limit_config import AuthType, OperationType, RateLimitResult
from core.redis import get_redis_client

logger = logging.getLogger(__name__)

MINUTE = 60
DAY = 86400


def _allow_all(limit: int) -> RateLimitResult:
    return RateLimitResult(allowed=True, limit=limit, remaining=limit, reset=0, retry_after=0)


async def check_rate_limit(
    user_id: UUID,
    auth_type: AuthType,
    operation_type: OperationType,
) -> RateLimitResult:
    """
    Count one request against the caller's per-minute and daily limits.

    The per-minute result is returned when both limits pass, since that is the
    window the response headers describe.
    """
    # Looked up at call time so tests can patch the policy table
    from core.rate_limit_config import RATE_LIMITS

    config = RATE_LIMITS.get((auth_type, operation_type))
    if config is None:
        return _allow_all(0)

    redis_client = get_redis_client()
    if redis_client is None or not redis_client.is_connected:
        logger.warning("redis_unavailable", extra={"operation": "rate_limit"})
        return _allow_all(config.requests_per_minute)

    now = int(time.time())
    log_extra = {
        "user_id": str(user_id),
        "operation": operation_type.value,
        "auth_type": auth_type.value,
    }

    minute_key = f"rate:{user_id}:{auth_type.value}:{operation_type.value}:min"
    minute_result = await _check_sliding_window(
        minute_key, config.requests_per_minute, MINUTE, now,
    )
    if not minute_result.allowed:
        logger.warning("rate_limit_exceeded", extra={**log_extra, "limit_type": "per_minute"})
        return minute_result

    daily_pool = "sensitive" if operation_type == OperationType.SENSITIVE else "general"
    day_result = await _check_fixed_window(
        f"rate:{user_id}:daily:{daily_pool}", config.requests_per_day, DAY, now,
    )
    if not day_result.allowed:
        logger.warning("rate_limit_exceeded", extra={**log_extra, "limit_type": "daily"})
        return day_result

    return minute_result


async def _check_sliding_window(
    key: str, max_requests: int, window_seconds: int, now: int,
) -> RateLimitResult:
    """Sliding window over a sorted set; exact at window boundaries."""
    redis_client = get_redis_client()
    result = None
    if redis_client is not None:
        result = await redis_client.eval_sliding_window(
            key=key,
            now=now,
            window_seconds=window_seconds,
            max_requests=max_requests,
            request_id=str(uuid.uuid4()),
        )
    if result is None:
        return _allow_all(max_requests)

    allowed, remaining, retry_after = result
    return RateLimitResult(
        allowed=bool(allowed),
        limit=max_requests,
        remaining=max(0, remaining),
        reset=now + window_seconds,
        retry_after=0 if allowed else max(0, retry_after),
    )


async def _check_fixed_window(
    key: str, max_requests: int, window_seconds: int, now: int,
) -> RateLimitResult:
    """Fixed window counter; cheaper, used for the daily caps."""
    redis_client = get_redis_client()
    result = None
    if redis_client is not None:
        result = await redis_client.eval_fixed_window(
            key=key,
            max_requests=max_requests,
            window_seconds=window_seconds,
        )
    if result is None:
        return _allow_all(max_requests)

    allowed, remaining, ttl, retry_after = result
    return RateLimitResult(
        allowed=bool(allowed),
        limit=max_requests,
        remaining=max(0, remaining),
        reset=now + ttl if ttl > 0 else now + window_seconds,
        retry_after=0 if allowed else max(0, retry_after),
    )
