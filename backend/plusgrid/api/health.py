from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from plusgrid.api.deps import code_format_from_settings
from plusgrid.core.settings import Settings, get_settings
from plusgrid.utils.olc import MAX_CODE_LENGTH, MIN_CODE_LENGTH, decode, encode


router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(settings: Settings = Depends(get_settings)) -> JSONResponse:
    # Readiness: the configured format must be usable and round-trip a code.
    try:
        fmt = code_format_from_settings(settings)
    except ValueError:
        return JSONResponse(status_code=503, content={"status": "not_ready"})

    if not MIN_CODE_LENGTH <= settings.default_code_length <= MAX_CODE_LENGTH:
        return JSONResponse(status_code=503, content={"status": "not_ready"})

    try:
        area = decode(encode(0.0, 0.0, settings.default_code_length, fmt=fmt), fmt=fmt)
    except ValueError:
        return JSONResponse(status_code=503, content={"status": "not_ready"})
    if not area.contains(0.0, 0.0):
        return JSONResponse(status_code=503, content={"status": "not_ready"})

    return JSONResponse(status_code=200, content={"status": "ready"})
