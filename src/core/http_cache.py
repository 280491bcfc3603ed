"""HTTP caching: weak ETags on GET JSON responses and Cache-Control presets."""
import hashlib

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

# Shared caches may keep public catalog pages briefly and serve them stale
# while revalidating
LIST_CACHE_CONTROL = "public, s-maxage=30, stale-while-revalidate=60"
STATS_CACHE_CONTROL = "public, s-maxage=60, stale-while-revalidate=120"

# Used when an endpoint did not choose a policy of its own
DEFAULT_CACHE_CONTROL = "private, must-revalidate"


def generate_etag(content: bytes) -> str:
    """Weak ETag fingerprinting a response body (MD5 for speed, not security)."""
    return f'W/"{hashlib.md5(content).hexdigest()[:16]}"'


def _parse_if_none_match(header_value: str) -> list[str]:
    """Split an If-None-Match header into its ETags ('*' stays as is)."""
    if not header_value:
        return []
    if header_value.strip() == "*":
        return ["*"]
    return [etag.strip() for etag in header_value.split(",") if etag.strip()]


def _etag_matches(etag: str, if_none_match_values: list[str]) -> bool:
    return "*" in if_none_match_values or etag in if_none_match_values


def set_public_cache(response: Response, cache_control: str = LIST_CACHE_CONTROL) -> None:
    """Mark a response as cacheable by shared caches."""
    response.headers["Cache-Control"] = cache_control


class ETagMiddleware(BaseHTTPMiddleware):
    """
    Add ETags to successful GET JSON responses and answer 304 on a match.

    The Cache-Control chosen by the endpoint is preserved; responses without
    one get DEFAULT_CACHE_CONTROL. Authenticated variants are separated with
    `Vary: Authorization`.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Fingerprint the body and compare it with If-None-Match."""
        if request.method != "GET":
            return await call_next(request)

        response = await call_next(request)

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type or response.status_code >= 400:
            return response

        body = b"".join([chunk async for chunk in response.body_iterator])
        etag = generate_etag(body)
        cache_headers = {
            "Cache-Control": response.headers.get("cache-control", DEFAULT_CACHE_CONTROL),
            "Vary": "Authorization",
        }

        if_none_match = request.headers.get("if-none-match")
        if if_none_match and _etag_matches(etag, _parse_if_none_match(if_none_match)):
            return Response(status_code=304, headers={"ETag": etag, **cache_headers})

        headers = {
            key: value
            for key, value in response.headers.items()
            if key not in ("content-length", "cache-control", "vary")
        }
        headers["ETag"] = etag
        headers.update(cache_headers)
        return Response(
            content=body,
            status_code=response.status_code,
            headers=headers,
            media_type=response.media_type,
        )
