from __future__ import annotations

from fastapi import APIRouter, Depends

from odds_proxy.api.deps import get_cache
from odds_proxy.core.scheduler import scheduler_is_running, scheduler_next_run_times
from odds_proxy.services.cache_store import ResponseCache
from odds_proxy.services.quota import get_quota_state

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/cache")
def cache_status(cache: ResponseCache = Depends(get_cache)) -> dict[str, object]:
    next_runs = scheduler_next_run_times()
    return {
        **cache.stats(),
        "sweep_running": scheduler_is_running(),
        "next_sweep_at": next_runs["cache_sweep_job"].isoformat()
        if next_runs.get("cache_sweep_job")
        else None,
    }


@router.get("/quota")
def system_quota() -> dict:
    return get_quota_state()
