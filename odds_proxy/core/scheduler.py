from __future__ import annotations

import logging
from datetime import datetime, timezone

from apscheduler.schedulers.background import BackgroundScheduler

from odds_proxy.config import Settings
from odds_proxy.services.cache_store import ResponseCache

logger = logging.getLogger(__name__)

_scheduler: BackgroundScheduler | None = None


def _run_sweep(cache: ResponseCache, max_age_sec: int) -> None:
    try:
        cache.sweep(max_age_sec)
    except Exception:  # noqa: BLE001
        logger.exception("Cache sweep job failed")


def start_scheduler(settings: Settings, cache: ResponseCache) -> bool:
    global _scheduler

    if not settings.enable_cache_sweep:
        logger.info("Cache sweep disabled by ENABLE_CACHE_SWEEP=false")
        return False

    if _scheduler is not None and _scheduler.running:
        return True

    _scheduler = BackgroundScheduler(timezone=timezone.utc)
    _scheduler.add_job(
        _run_sweep,
        "interval",
        args=[cache, settings.cache_sweep_max_age_sec],
        id="cache_sweep_job",
        seconds=settings.cache_sweep_interval_sec,
        max_instances=1,
        replace_existing=True,
    )
    _scheduler.start()
    return True


def stop_scheduler() -> None:
    global _scheduler
    if _scheduler is not None:
        _scheduler.shutdown(wait=False)
        _scheduler = None


def scheduler_is_running() -> bool:
    return _scheduler is not None and _scheduler.running


def scheduler_next_run_times() -> dict[str, datetime | None]:
    if _scheduler is None:
        return {}
    return {job.id: job.next_run_time for job in _scheduler.get_jobs()}
