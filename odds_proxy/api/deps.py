from __future__ import annotations

from fastapi import Depends, Request

from odds_proxy.services.cache_store import ResponseCache
from odds_proxy.services.proxy import OddsProxy


def get_proxy(request: Request) -> OddsProxy:
    return request.app.state.proxy


def get_cache(proxy: OddsProxy = Depends(get_proxy)) -> ResponseCache:
    return proxy.cache
