from __future__ import annotations

from fastapi import APIRouter

from plusgrid.api.codes import router as codes_router
from plusgrid.api.health import router as health_router


api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(codes_router)
