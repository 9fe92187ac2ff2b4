import logging

from fastapi import FastAPI

from odds_proxy.api.router import api_router
from odds_proxy.config import get_settings
from odds_proxy.core.scheduler import start_scheduler, stop_scheduler
from odds_proxy.services.cache_store import ResponseCache
from odds_proxy.services.proxy import OddsProxy


def setup_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


setup_logging()
settings = get_settings()
app = FastAPI(title=settings.app_name)
app.state.proxy = OddsProxy(settings, ResponseCache(max_entries=settings.cache_max_entries))
app.include_router(api_router)


@app.on_event("startup")
def startup_event() -> None:
    start_scheduler(settings, app.state.proxy.cache)


@app.on_event("shutdown")
def shutdown_event() -> None:
    stop_scheduler()


@app.get("/health", tags=["health"])
def health() -> dict[str, str]:
    return {"status": "ok", "environment": settings.app_env}
