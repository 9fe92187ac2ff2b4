from fastapi import APIRouter

from odds_proxy.api.odds import router as odds_router
from odds_proxy.api.system import router as system_router

api_router = APIRouter()
api_router.include_router(odds_router)
api_router.include_router(system_router)
