from __future__ import annotations

import logging
from datetime import datetime, timezone
from urllib.parse import quote, quote_plus, urlparse

import requests

from odds_proxy.config import get_settings
from odds_proxy.services.quota import record_quota

logger = logging.getLogger(__name__)


class UpstreamTransportError(Exception):
    """The odds provider could not be reached (DNS, refused connection, reset)."""


def _safe_url(url: str) -> str:
    """Strip the query string, which carries the API key."""
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}{parsed.path}"


def _redact(text: str, secret: str) -> str:
    for form in {secret, quote(secret, safe=""), quote_plus(secret)}:
        text = text.replace(form, "***")
    return text


def build_upstream_url(base_url: str, sport: str, event_id: str | None = None) -> str:
    sport_segment = quote(sport, safe="")
    if event_id is None:
        return f"{base_url.rstrip('/')}/sports/{sport_segment}/odds"
    return f"{base_url.rstrip('/')}/sports/{sport_segment}/events/{quote(event_id, safe='')}/odds"


def fetch_odds(
    sport: str,
    regions: str,
    markets: str,
    odds_format: str,
    api_key: str,
    event_id: str | None = None,
    *,
    base_url: str | None = None,
    timeout: float | None = None,
) -> tuple[int, str]:
    """Issue a single GET against the odds provider.

    Every HTTP status is a valid result and is returned with the raw body
    text; only transport failures raise.
    """
    if not api_key:
        raise ValueError("ODDS_API_KEY is required to query the odds provider")

    url = build_upstream_url(base_url or get_settings().odds_api_base_url, sport, event_id)
    try:
        response = requests.get(
            url,
            params={
                "regions": regions,
                "markets": markets,
                "oddsFormat": odds_format,
                "apiKey": api_key,
            },
            headers={"accept": "application/json"},
            timeout=timeout,
        )
    except requests.RequestException as exc:
        # requests embeds the full URL in its messages; the chained traceback
        # would leak the key, so only a redacted detail is kept.
        detail = _redact(str(exc), api_key)
        raise UpstreamTransportError(
            f"GET {_safe_url(url)} failed: {type(exc).__name__}: {detail}"
        ) from None

    quota_headers = {
        key: value
        for key, value in response.headers.items()
        if key.lower().startswith("x-requests-")
    }
    record_quota(quota_headers, datetime.now(timezone.utc))

    if not 200 <= response.status_code < 300:
        logger.warning("Upstream returned %d for %s", response.status_code, _safe_url(url))
    return response.status_code, response.text
