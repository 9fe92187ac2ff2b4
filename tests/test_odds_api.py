from __future__ import annotations

import pytest
import requests

from odds_proxy.integrations import odds_api
from odds_proxy.integrations.odds_api import UpstreamTransportError, build_upstream_url, fetch_odds
from odds_proxy.services.quota import get_quota_state, reset_quota_state


class _FakeResponse:
    def __init__(self, status_code: int, text: str, headers: dict[str, str] | None = None) -> None:
        self.status_code = status_code
        self.text = text
        self.headers = headers or {}


def test_build_upstream_url_encodes_path_segments() -> None:
    base = "https://api.the-odds-api.com/v4/"
    assert build_upstream_url(base, "basketball_nba") == "https://api.the-odds-api.com/v4/sports/basketball_nba/odds"
    assert (
        build_upstream_url(base, "americanfootball_nfl", "a/b c")
        == "https://api.the-odds-api.com/v4/sports/americanfootball_nfl/events/a%2Fb%20c/odds"
    )


def test_fetch_odds_returns_raw_status_and_text(monkeypatch) -> None:
    calls: list[dict] = []

    def fake_get(url, params, headers, timeout):
        calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        return _FakeResponse(200, "[]", {"x-requests-remaining": "480", "x-requests-used": "20", "date": "x"})

    reset_quota_state()
    monkeypatch.setattr(odds_api.requests, "get", fake_get)
    status, text = fetch_odds(
        "americanfootball_nfl", "us", "h2h,spreads", "american", "secret", base_url="https://example.test/v4"
    )

    assert (status, text) == (200, "[]")
    assert len(calls) == 1
    assert calls[0]["url"] == "https://example.test/v4/sports/americanfootball_nfl/odds"
    assert calls[0]["params"] == {
        "regions": "us",
        "markets": "h2h,spreads",
        "oddsFormat": "american",
        "apiKey": "secret",
    }
    assert calls[0]["headers"] == {"accept": "application/json"}
    assert calls[0]["timeout"] is None
    assert get_quota_state()["headers"] == {"x-requests-remaining": "480", "x-requests-used": "20"}


def test_fetch_odds_does_not_raise_on_error_status(monkeypatch) -> None:
    monkeypatch.setattr(
        odds_api.requests, "get", lambda *args, **kwargs: _FakeResponse(404, '{"message":"not found"}')
    )
    status, text = fetch_odds("x", "us", "h2h", "american", "secret", "evt1", base_url="https://example.test/v4")
    assert status == 404
    assert text == '{"message":"not found"}'


def test_fetch_odds_transport_error_hides_credential(monkeypatch) -> None:
    def fake_get(url, params, **kwargs):
        raise requests.ConnectionError(f"Max retries exceeded with url: /v4/odds?apiKey={params['apiKey']}")

    monkeypatch.setattr(odds_api.requests, "get", fake_get)
    with pytest.raises(UpstreamTransportError) as excinfo:
        fetch_odds("x", "us", "h2h", "american", "s3cret", base_url="https://example.test/v4")

    assert "s3cret" not in str(excinfo.value)
    assert excinfo.value.__cause__ is None
    assert "ConnectionError" in str(excinfo.value)


def test_fetch_odds_requires_api_key(monkeypatch) -> None:
    def fail(*args, **kwargs):
        raise AssertionError("network must not be touched")

    monkeypatch.setattr(odds_api.requests, "get", fail)
    with pytest.raises(ValueError):
        fetch_odds("x", "us", "h2h", "american", "", base_url="https://example.test/v4")
