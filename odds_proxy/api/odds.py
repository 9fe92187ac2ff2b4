from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from odds_proxy.api.deps import get_proxy
from odds_proxy.core.headers import apply_headers
from odds_proxy.domain.enums import EndpointKind
from odds_proxy.services.proxy import OddsProxy, ProxyResult

router = APIRouter(prefix="/api", tags=["odds"])


def _to_response(result: ProxyResult) -> Response:
    response = Response(content=result.body, status_code=result.status_code)
    return apply_headers(response, result.ttl)


# Query values stay plain strings: malformed input is coerced to defaults
# instead of being rejected with a 422.
@router.get("/odds")
def list_odds(
    sport: str | None = Query(None),
    regions: str | None = Query(None),
    markets: str | None = Query(None),
    odds_format: str | None = Query(None, alias="oddsFormat"),
    ttl: str | None = Query(None),
    proxy: OddsProxy = Depends(get_proxy),
) -> Response:
    result = proxy.handle_query(
        EndpointKind.COLLECTION,
        sport=sport,
        regions=regions,
        markets=markets,
        odds_format=odds_format,
        ttl=ttl,
    )
    return _to_response(result)


@router.get("/events/{event_id}")
def event_odds(
    event_id: str,
    sport: str | None = Query(None),
    regions: str | None = Query(None),
    markets: str | None = Query(None),
    odds_format: str | None = Query(None, alias="oddsFormat"),
    ttl: str | None = Query(None),
    proxy: OddsProxy = Depends(get_proxy),
) -> Response:
    result = proxy.handle_query(
        EndpointKind.SINGLE,
        sport=sport,
        regions=regions,
        markets=markets,
        odds_format=odds_format,
        ttl=ttl,
        event_id=event_id,
    )
    return _to_response(result)
