"""Redis-backed rate limiting middleware."""

from __future__ import annotations

from datetime import UTC, datetime

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from starlette.middleware.base import BaseHTTPMiddleware

from agrialign.config import get_settings

_BYPASS_PREFIXES = ("/docs", "/redoc", "/openapi", "/health")

_logger = structlog.get_logger("agrialign.rate_limit")


class RateLimitMiddleware(BaseHTTPMiddleware):
	"""Per-client quota limiter backed by Redis atomic counters."""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		if self._is_bypass_path(request.url.path):
			return await call_next(request)

		redis_client = getattr(request.app.state, "redis", None)
		if redis_client is None:
			return await call_next(request)

		quota = get_settings().rate_limit_per_minute
		client = self._client_key(request)
		minute_bucket = datetime.now(UTC).strftime("%Y%m%d%H%M")
		key = f"ratelimit:client:{client}:{minute_bucket}"
		try:
			current = await redis_client.incr(key)
			if current == 1:
				await redis_client.expire(key, 65)
		except RedisError as exc:
			_logger.warning("rate_limit_unavailable", client=client, error=str(exc))
			return await call_next(request)

		if current > quota:
			return JSONResponse(
				status_code=429,
				content={
					"detail": {
						"error": "rate_limited",
						"message": "Too many requests, please try again later",
						"client": client,
						"quota": quota,
					}
				},
			)

		return await call_next(request)

	@staticmethod
	def _client_key(request: Request) -> str:
		forwarded = request.headers.get("x-forwarded-for")
		if forwarded:
			return forwarded.split(",")[0].strip()
		if request.client is not None:
			return request.client.host
		return "unknown"

	@staticmethod
	def _is_bypass_path(path: str) -> bool:
		return path.startswith(_BYPASS_PREFIXES)
