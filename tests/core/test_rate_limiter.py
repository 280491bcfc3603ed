"""Tests for the rate limit policy and its Redis-backed enforcement."""
from collections.abc import Iterator
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from core.rate_limit_config import (
    RATE_LIMITS,
    AuthType,
    OperationType,
    get_operation_type,
)
from core.rate_limiter import check_rate_limit
from core.redis import RedisClient, set_redis_client

PAT_READ_CONFIG = RATE_LIMITS[(AuthType.PAT, OperationType.READ)]
PAT_WRITE_CONFIG = RATE_LIMITS[(AuthType.PAT, OperationType.WRITE)]


@pytest.fixture
def fake_redis() -> Iterator[MagicMock]:
    """A connected RedisClient whose scripts are mocked, installed globally."""
    client = MagicMock(spec=RedisClient)
    client.is_connected = True
    client.eval_sliding_window = AsyncMock(return_value=[1, 119, 0])
    client.eval_fixed_window = AsyncMock(return_value=[1, 1999, 86000, 0])
    set_redis_client(client)
    yield client
    set_redis_client(None)


class TestGetOperationType:
    """Tests for get_operation_type function."""

    def test__get_operation_type__get_request_is_read(self) -> None:
        assert get_operation_type("GET", "/prompts/") == OperationType.READ

    def test__get_operation_type__head_request_is_read(self) -> None:
        assert get_operation_type("HEAD", "/health") == OperationType.READ

    @pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE"])
    def test__get_operation_type__mutations_are_write(self, method: str) -> None:
        assert get_operation_type(method, "/prompts/my-prompt") == OperationType.WRITE

    def test__get_operation_type__contribution_is_sensitive(self) -> None:
        """Contributions call the GitHub API on the user's behalf."""
        assert get_operation_type("POST", "/contributions/") == OperationType.SENSITIVE
        assert get_operation_type("POST", "/contributions") == OperationType.SENSITIVE


class TestRateLimitPolicy:
    def test__every_combination_is_configured(self) -> None:
        for auth_type in AuthType:
            for operation_type in OperationType:
                assert (auth_type, operation_type) in RATE_LIMITS

    def test__login_tokens_get_higher_limits_than_pats(self) -> None:
        for operation_type in OperationType:
            pat = RATE_LIMITS[(AuthType.PAT, operation_type)]
            github = RATE_LIMITS[(AuthType.GITHUB, operation_type)]
            assert github.requests_per_minute > pat.requests_per_minute
            assert github.requests_per_day > pat.requests_per_day


class TestCheckRateLimit:
    """Tests for check_rate_limit function."""

    async def test__check__allows_everything_without_redis(self) -> None:
        """Rate limiting fails open when Redis is unavailable."""
        set_redis_client(None)
        result = await check_rate_limit(uuid4(), AuthType.PAT, OperationType.READ)
        assert result.allowed is True
        assert result.limit == PAT_READ_CONFIG.requests_per_minute
        assert result.retry_after == 0

    async def test__check__returns_minute_window_when_allowed(
        self, fake_redis: MagicMock,
    ) -> None:
        user_id = uuid4()
        result = await check_rate_limit(user_id, AuthType.PAT, OperationType.READ)

        assert result.allowed is True
        assert result.limit == PAT_READ_CONFIG.requests_per_minute
        assert result.remaining == 119

        minute_call = fake_redis.eval_sliding_window.await_args.kwargs
        assert minute_call["key"] == f"rate:{user_id}:pat:read:min"
        assert minute_call["max_requests"] == PAT_READ_CONFIG.requests_per_minute
        assert minute_call["window_seconds"] == 60

        day_call = fake_redis.eval_fixed_window.await_args.kwargs
        assert day_call["key"] == f"rate:{user_id}:daily:general"
        assert day_call["max_requests"] == PAT_READ_CONFIG.requests_per_day

    async def test__check__minute_limit_exceeded_skips_daily_count(
        self, fake_redis: MagicMock,
    ) -> None:
        fake_redis.eval_sliding_window.return_value = [0, 0, 42]

        result = await check_rate_limit(uuid4(), AuthType.PAT, OperationType.WRITE)

        assert result.allowed is False
        assert result.remaining == 0
        assert result.retry_after == 42
        assert result.limit == PAT_WRITE_CONFIG.requests_per_minute
        fake_redis.eval_fixed_window.assert_not_awaited()

    async def test__check__daily_limit_exceeded(self, fake_redis: MagicMock) -> None:
        fake_redis.eval_fixed_window.return_value = [0, 0, 3600, 3600]

        result = await check_rate_limit(uuid4(), AuthType.PAT, OperationType.READ)

        assert result.allowed is False
        assert result.limit == PAT_READ_CONFIG.requests_per_day
        assert result.retry_after == 3600

    async def test__check__sensitive_uses_separate_daily_pool(
        self, fake_redis: MagicMock,
    ) -> None:
        user_id = uuid4()
        await check_rate_limit(user_id, AuthType.GITHUB, OperationType.SENSITIVE)

        day_call = fake_redis.eval_fixed_window.await_args.kwargs
        assert day_call["key"] == f"rate:{user_id}:daily:sensitive"

    async def test__check__script_failure_allows_request(self, fake_redis: MagicMock) -> None:
        fake_redis.eval_sliding_window.return_value = None
        fake_redis.eval_fixed_window.return_value = None

        result = await check_rate_limit(uuid4(), AuthType.PAT, OperationType.READ)
        assert result.allowed is True
