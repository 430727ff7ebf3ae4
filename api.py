"""
HTTP layer for the booking availability engine.

Endpoints:
- GET /availability  open slots for a category pair and date range
- GET /categories    opening windows of every category pair
- GET /health        service status and request counters

Busy intervals come from an injected provider so calendar access and its
caching stay outside this service.
"""

import inspect
import time
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, Iterable, Optional, Union

from aiohttp import web
from aiohttp.web import Request, Response

from availability.adapter import RawEvent, parse_busy_intervals, serialize_result
from availability.constraints import describe_categories
from availability.engine import query_availability
from config import settings
from models.request import AvailabilityRequest
from utils.exceptions import CalendarServiceError, ValidationError
from utils.logging_config import setup_logging
from utils.validation import (
    normalize_token,
    parse_datetime_param,
    parse_flag,
    parse_min_duration,
    validate_date_range,
    validate_token,
)

logger = setup_logging(name=__name__, log_file="api.log")

BusyProvider = Callable[
    [datetime, datetime], Union[Iterable[RawEvent], Awaitable[Iterable[RawEvent]]]
]

BUSY_PROVIDER_KEY = web.AppKey("busy_provider", object)

_health_metrics = {
    "total_requests": 0,
    "failed_requests": 0,
    "validation_failures": 0,
    "provider_failures": 0,
    "start_time": time.time(),
}


def _error(status: int, error: str, message: str) -> Response:
    return web.json_response(
        {"status": "error", "error": error, "message": message}, status=status
    )


def parse_availability_query(query: Dict[str, str]) -> AvailabilityRequest:
    """
    Build an AvailabilityRequest from query parameters.

    Raises:
        ValidationError: If a parameter is missing or malformed
    """
    category = query.get("category")
    subcategory = query.get("subcategory")
    if not category or not subcategory:
        raise ValidationError("Category and subcategory are required")
    if not validate_token(category) or not validate_token(subcategory):
        raise ValidationError("Category and subcategory must be simple identifiers")

    tz = settings.get_timezone()
    start = parse_datetime_param("start", query.get("start"), tz)
    end = parse_datetime_param("end", query.get("end"), tz)
    validate_date_range(start, end, settings.max_range_days)

    min_duration = parse_min_duration(query.get("minDuration"))
    if min_duration is None:
        min_duration = settings.default_min_duration

    return AvailabilityRequest(
        category=normalize_token(category),
        subcategory=normalize_token(subcategory),
        start=start,
        end=end,
        min_duration=min_duration,
        group_by_day=parse_flag(query.get("groupByDay")),
        not_before=datetime.now(tz) if parse_flag(query.get("futureOnly")) else None,
    )


async def fetch_busy_events(
    provider: Optional[BusyProvider], start: datetime, end: datetime
) -> Iterable[RawEvent]:
    """
    Call the busy-interval provider.

    Raises:
        CalendarServiceError: If the provider fails
    """
    if provider is None:
        logger.warning(
            "No calendar provider configured. Availability will not reflect "
            "actual calendar conflicts."
        )
        return []
    try:
        events = provider(start, end)
        if inspect.isawaitable(events):
            events = await events
        return list(events or [])
    except Exception as e:
        raise CalendarServiceError(f"Calendar provider failed: {e}") from e


@web.middleware
async def security_headers_middleware(request: Request, handler):
    """Add security headers to all responses."""
    response = await handler(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Cache-Control"] = "no-store"
    return response


async def availability_handler(request: Request) -> Response:
    """Return available blocks, flat or grouped by day."""
    _health_metrics["total_requests"] += 1

    try:
        availability_request = parse_availability_query(dict(request.query))

        raw_events = await fetch_busy_events(
            request.app.get(BUSY_PROVIDER_KEY),
            availability_request.start,
            availability_request.end,
        )
        tz = settings.get_timezone()
        busy = parse_busy_intervals(raw_events, tz)

        result = query_availability(availability_request, busy, tz)
        return web.json_response(serialize_result(result, tz))

    except ValidationError as e:
        logger.warning(f"Invalid availability request: {e}")
        _health_metrics["validation_failures"] += 1
        return _error(400, "validation_failed", str(e))

    except CalendarServiceError as e:
        logger.error(f"Could not fetch calendar events: {e}")
        _health_metrics["provider_failures"] += 1
        return _error(503, "calendar_unavailable", "Calendar service temporarily unavailable")

    except Exception as e:
        logger.error(f"Unexpected availability error: {e}", exc_info=True)
        _health_metrics["failed_requests"] += 1
        return _error(500, "processing_failed", "Failed to fetch availability")


async def categories_handler(request: Request) -> Response:
    """List every category pair with its opening windows."""
    return web.json_response({"categories": describe_categories()})


async def health_check(request: Request) -> Response:
    """Service status and request counters."""
    uptime_hours = (time.time() - _health_metrics["start_time"]) / 3600
    metrics: Dict[str, Any] = {
        k: v for k, v in _health_metrics.items() if k != "start_time"
    }
    return web.json_response(
        {
            "status": "ok",
            "service": "booking-availability",
            "timestamp": time.time(),
            "uptime_hours": round(uptime_hours, 2),
            "metrics": metrics,
            "configuration": {
                "timezone": settings.timezone,
                "slot_duration_minutes": settings.slot_duration_minutes,
                "max_range_days": settings.max_range_days,
                "calendar_provider_configured": request.app.get(BUSY_PROVIDER_KEY)
                is not None,
            },
        }
    )


def create_app(busy_provider: Optional[BusyProvider] = None) -> web.Application:
    """
    Create aiohttp application with middleware and routes.

    Args:
        busy_provider: Callable (start, end) returning raw calendar events,
            either directly or as an awaitable

    Returns:
        Configured web application
    """
    app = web.Application(middlewares=[security_headers_middleware])
    app[BUSY_PROVIDER_KEY] = busy_provider

    app.router.add_get("/availability", availability_handler)
    app.router.add_get("/categories", categories_handler)
    app.router.add_get("/health", health_check)

    return app


if __name__ == "__main__":
    settings.validate_all_required()
    logger.info(f"Starting availability server on {settings.host}:{settings.port}")
    web.run_app(create_app(), host=settings.host, port=settings.port)
