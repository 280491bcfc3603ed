"""FastAPI application entry point."""
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import (
    agents,
    auth,
    collections,
    contributions,
    favorites,
    health,
    instructions,
    mcps,
    migrations,
    moderation,
    paths,
    prompts,
    recipes,
    search,
    tokens,
    tools,
    users,
    votes,
    workflows,
)
from core.config import get_settings
from core.http_cache import ETagMiddleware
from core.rate_limit_config import RateLimitExceededError
from core.redis import RedisClient, set_redis_client


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Connect to Redis on startup and disconnect on shutdown."""
    app_settings = get_settings()

    redis_client = RedisClient(
        url=app_settings.redis_url,
        enabled=app_settings.redis_enabled,
        pool_size=app_settings.redis_pool_size,
    )
    await redis_client.connect()
    set_redis_client(redis_client)

    yield

    await redis_client.close()
    set_redis_client(None)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        response.headers["Strict-Transport-Security"] = (
            "max-age=31536000; includeSubDomains"
        )
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response


class RateLimitHeadersMiddleware(BaseHTTPMiddleware):
    """Copy the rate limit state of authenticated requests into response headers."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add rate limit headers to response."""
        response = await call_next(request)

        # 429s get their headers from the exception handler
        info = getattr(request.state, "rate_limit_info", None)
        if info:
            response.headers["X-RateLimit-Limit"] = str(info["limit"])
            response.headers["X-RateLimit-Remaining"] = str(info["remaining"])
            response.headers["X-RateLimit-Reset"] = str(info["reset"])

        return response


app_settings = get_settings()

app = FastAPI(
    title="Copilot Directory API",
    description=(
        "A community directory of prompts, workflows, tools, MCP servers, "
        "instructions, agents, code recipes, migration guides and learning paths."
    ),
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(RateLimitExceededError)
async def rate_limit_exception_handler(
    _request: Request, exc: RateLimitExceededError,
) -> JSONResponse:
    """Handle rate limit exceeded with proper headers."""
    return JSONResponse(
        status_code=429,
        content={"detail": "Rate limit exceeded. Please try again later."},
        headers={
            "Retry-After": str(exc.result.retry_after),
            "X-RateLimit-Limit": str(exc.result.limit),
            "X-RateLimit-Remaining": "0",
            "X-RateLimit-Reset": str(exc.result.reset),
        },
    )


# Innermost: sees the endpoint's Cache-Control before the outer layers run
app.add_middleware(ETagMiddleware)
app.add_middleware(RateLimitHeadersMiddleware)
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(tokens.router)
app.include_router(prompts.router)
app.include_router(workflows.router)
app.include_router(tools.router)
app.include_router(mcps.router)
app.include_router(instructions.router)
app.include_router(agents.router)
app.include_router(recipes.router)
app.include_router(migrations.router)
app.include_router(paths.router)
app.include_router(search.router)
app.include_router(votes.router)
app.include_router(favorites.router)
app.include_router(collections.router)
app.include_router(moderation.router)
app.include_router(contributions.router)
