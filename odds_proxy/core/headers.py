from __future__ import annotations

from starlette.responses import Response

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


def cache_control_value(ttl: int) -> str:
    # Half-up rounding, so ttl=13 revalidates for 7 seconds, not 6.
    stale = (ttl + 1) // 2
    return f"s-maxage={ttl}, stale-while-revalidate={stale}"


def apply_headers(response: Response, ttl: int) -> Response:
    response.headers["Cache-Control"] = cache_control_value(ttl)
    response.headers["Content-Type"] = JSON_CONTENT_TYPE
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response
