from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass

from odds_proxy.config import Settings
from odds_proxy.core.cache_keys import derive_key
from odds_proxy.core.ttl import resolve_ttl
from odds_proxy.domain.enums import EndpointKind
from odds_proxy.integrations.odds_api import fetch_odds
from odds_proxy.services.cache_store import ResponseCache
from odds_proxy.services.transform import transform_body

logger = logging.getLogger(__name__)

PROXY_ERROR_BODY = json.dumps({"error": "Proxy error"}, separators=(",", ":"))

Fetcher = Callable[..., tuple[int, str]]


def _or_default(value: str | None, default: str) -> str:
    if value is None or not value.strip():
        return default
    return value


@dataclass(frozen=True, slots=True)
class OddsRequest:
    kind: EndpointKind
    sport: str
    regions: str
    markets: str
    odds_format: str
    ttl: int
    event_id: str | None = None

    def __post_init__(self) -> None:
        if self.kind is EndpointKind.SINGLE and not (self.event_id or "").strip():
            raise ValueError("event_id is required for single-event requests")

    @classmethod
    def from_query(
        cls,
        kind: EndpointKind,
        settings: Settings,
        sport: str | None = None,
        regions: str | None = None,
        markets: str | None = None,
        odds_format: str | None = None,
        ttl: str | None = None,
        event_id: str | None = None,
    ) -> "OddsRequest":
        default_markets = (
            settings.default_event_markets if kind is EndpointKind.SINGLE else settings.default_markets
        )
        return cls(
            kind=kind,
            sport=_or_default(sport, settings.default_sport),
            regions=_or_default(regions, settings.default_regions),
            markets=_or_default(markets, default_markets),
            odds_format=_or_default(odds_format, settings.default_odds_format),
            ttl=resolve_ttl(ttl, default=settings.cache_default_ttl_sec, floor=settings.cache_min_ttl_sec),
            event_id=event_id,
        )

    @property
    def resource_path(self) -> str:
        if self.kind is EndpointKind.SINGLE:
            return f"events/{self.event_id}"
        return "odds"

    def upstream_params(self) -> dict[str, str]:
        return {
            "sport": self.sport,
            "regions": self.regions,
            "markets": self.markets,
            "oddsFormat": self.odds_format,
        }


@dataclass(frozen=True, slots=True)
class ProxyResult:
    status_code: int
    body: str
    ttl: int
    cache_hit: bool = False


class OddsProxy:
    def __init__(self, settings: Settings, cache: ResponseCache, fetcher: Fetcher = fetch_odds) -> None:
        self.settings = settings
        self.cache = cache
        self._fetcher = fetcher

    def handle(self, request: OddsRequest) -> ProxyResult:
        try:
            return self._serve(request)
        except Exception:  # noqa: BLE001
            logger.exception("Proxy error serving %s", request.resource_path)
            return self.error_result()

    def handle_query(self, kind: EndpointKind, **query: str | None) -> ProxyResult:
        try:
            request = OddsRequest.from_query(kind, self.settings, **query)
        except Exception:  # noqa: BLE001
            logger.exception("Proxy error parsing %s request", kind)
            return self.error_result()
        return self.handle(request)

    def error_result(self) -> ProxyResult:
        return ProxyResult(status_code=500, body=PROXY_ERROR_BODY, ttl=self.settings.error_ttl_sec)

    def _serve(self, request: OddsRequest) -> ProxyResult:
        key = derive_key(request.resource_path, request.upstream_params())

        hit = self.cache.lookup_fresh(key, request.ttl)
        if hit is not None:
            logger.debug("Cache hit for %s", key)
            return ProxyResult(hit.status_code, hit.body, request.ttl, cache_hit=True)

        logger.info("Cache miss for %s, fetching upstream", key)
        status_code, text = self._fetcher(
            request.sport,
            request.regions,
            request.markets,
            request.odds_format,
            self.settings.odds_api_key,
            request.event_id,
            base_url=self.settings.odds_api_base_url,
            timeout=self.settings.upstream_timeout_sec,
        )
        body = transform_body(status_code, text, request.kind, self.settings.bookmaker_allowlist)

        # Error statuses are cached too, so a failing upstream is not hammered.
        self.cache.put(key, self.cache.new_entry(status_code, body))
        return ProxyResult(status_code, body, request.ttl)
