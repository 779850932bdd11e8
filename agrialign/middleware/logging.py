"""Structured JSON logging with request ID and coordination context propagation."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from agrialign.config import LogFormat, get_settings
from agrialign.errors import EmptyInputError, InvalidInputError, NotFoundError

_configured = False

_API_PREFIX = "/api/v1/"

# Most specific first: EmptyInputError and InvalidInputError are both ValueErrors.
_ERROR_KINDS: tuple[tuple[type[Exception], str], ...] = (
	(EmptyInputError, "empty_input"),
	(InvalidInputError, "invalid_input"),
	(NotFoundError, "not_found"),
	(LookupError, "lookup"),
	(ValueError, "invalid_value"),
)


def configure_structured_logging() -> None:
	"""Configure stdlib + structlog once for API process."""
	global _configured
	if _configured:
		return

	settings = get_settings()
	log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

	timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)
	shared_processors: list[Any] = [
		structlog.contextvars.merge_contextvars,
		structlog.processors.add_log_level,
		timestamper,
	]

	if settings.log_format == LogFormat.json:
		renderer: Any = structlog.processors.JSONRenderer()
		logging.basicConfig(level=log_level, format="%(message)s")
	else:
		renderer = structlog.dev.ConsoleRenderer()
		logging.basicConfig(level=log_level)

	structlog.configure(
		processors=[
			*shared_processors,
			structlog.processors.format_exc_info,
			renderer,
		],
		wrapper_class=structlog.make_filtering_bound_logger(log_level),
		logger_factory=structlog.PrintLoggerFactory(),
		cache_logger_on_first_use=True,
	)
	_configured = True


def error_kind(exc: Exception) -> str:
	for error_type, kind in _ERROR_KINDS:
		if isinstance(exc, error_type):
			return kind
	return "internal"


def record_service_error(request: Request, exc: Exception) -> None:
	"""Remember why a route failed so the request log can report it."""
	request.state.error_kind = error_kind(exc)
	if isinstance(exc, InvalidInputError):
		request.state.error_field = exc.field


def coordination_context(path: str) -> dict[str, str]:
	"""Log fields for an API path, e.g. ``/api/v1/forecast/dashboard``.

	``area`` is the router (``forecast`` or ``data``); forecast paths also
	carry the pipeline ``stage``.
	"""
	if not path.startswith(_API_PREFIX):
		return {}

	parts = path[len(_API_PREFIX):].strip("/").split("/")
	context = {"area": parts[0]}
	if parts[0] == "forecast" and len(parts) > 1:
		context["stage"] = parts[1]
	return context


class RequestLoggingMiddleware(BaseHTTPMiddleware):
	"""Attach request IDs and coordination context, and log per-request timing."""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
		request.state.request_id = request_id
		context = coordination_context(request.url.path)

		structlog.contextvars.clear_contextvars()
		structlog.contextvars.bind_contextvars(request_id=request_id, **context)

		logger = structlog.get_logger("agrialign.request")
		start = time.perf_counter()

		try:
			response = await call_next(request)
		except Exception as exc:
			duration_ms = (time.perf_counter() - start) * 1000.0
			logger.exception(
				"http_request_failed",
				method=request.method,
				path=request.url.path,
				duration_ms=round(duration_ms, 2),
				error_kind=error_kind(exc),
				error=str(exc),
			)
			raise

		duration_ms = (time.perf_counter() - start) * 1000.0
		response.headers["x-request-id"] = request_id

		fields: dict[str, Any] = {
			"method": request.method,
			"path": request.url.path,
			"status_code": response.status_code,
			"duration_ms": round(duration_ms, 2),
		}
		kind = getattr(request.state, "error_kind", None)
		if kind is not None:
			fields["error_kind"] = kind
			field = getattr(request.state, "error_field", None)
			if field is not None:
				fields["error_field"] = field
			logger.warning("http_request_rejected", **fields)
		else:
			logger.info("http_request", **fields)
		return response
