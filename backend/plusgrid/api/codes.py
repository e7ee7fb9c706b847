from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from plusgrid.api.deps import get_code_format
from plusgrid.core.errors import invalid_argument
from plusgrid.core.settings import Settings, get_settings
from plusgrid.utils import olc
from plusgrid.utils.olc import CodeArea, CodeFormat


router = APIRouter(prefix="/v1/codes", tags=["codes"])


logger = logging.getLogger(__name__)


# Codes travel in JSON bodies: "+" is not safe in a query string.
class CodeIn(BaseModel):
    code: str = Field(min_length=1, max_length=32)


class PointIn(BaseModel):
    # Out-of-range values are clipped/wrapped by the codec, not rejected.
    latitude: float = Field(allow_inf_nan=False)
    longitude: float = Field(allow_inf_nan=False)


class EncodeRequest(PointIn):
    code_length: int | None = None


class ShortenRequest(CodeIn, PointIn):
    pass


class RecoverRequest(CodeIn, PointIn):
    code_length: int | None = None


class ContainsRequest(CodeIn, PointIn):
    pass


class CodeAreaOut(BaseModel):
    latitude_lo: float
    longitude_lo: float
    latitude_hi: float
    longitude_hi: float
    latitude_center: float
    longitude_center: float
    code_length: int
    # Polygon order: northwest, southwest, southeast, northeast.
    corners: list[tuple[float, float]]
    distance_m: float


class CodeResponse(BaseModel):
    code: str
    area: CodeAreaOut | None = None


class ValidateResponse(BaseModel):
    code: str
    is_valid: bool
    is_short: bool
    is_full: bool
    is_padded: bool


class ContainsResponse(BaseModel):
    code: str
    contains: bool


def _area_out(area: CodeArea) -> CodeAreaOut:
    return CodeAreaOut(
        latitude_lo=area.latitude_lo,
        longitude_lo=area.longitude_lo,
        latitude_hi=area.latitude_hi,
        longitude_hi=area.longitude_hi,
        latitude_center=area.latitude_center,
        longitude_center=area.longitude_center,
        code_length=area.code_length,
        corners=[area.northwest, area.southwest, area.southeast, area.northeast],
        distance_m=olc.distance(area),
    )


@router.post("/encode", response_model=CodeResponse)
async def encode_code(
    payload: EncodeRequest,
    fmt: CodeFormat = Depends(get_code_format),
    settings: Settings = Depends(get_settings),
) -> CodeResponse:
    code_length = payload.code_length
    if code_length is None:
        code_length = settings.default_code_length
    try:
        code = olc.encode(
            payload.latitude, payload.longitude, code_length, fmt=fmt
        )
        area = olc.decode(code, fmt=fmt)
    except ValueError as exc:
        logger.debug("encode rejected (code_length=%s): %s", code_length, exc)
        raise invalid_argument(exc, details={"code_length": code_length}) from exc

    return CodeResponse(code=code, area=_area_out(area))


@router.post("/decode", response_model=CodeAreaOut)
async def decode_code(
    payload: CodeIn,
    fmt: CodeFormat = Depends(get_code_format),
) -> CodeAreaOut:
    try:
        area = olc.decode(payload.code, fmt=fmt)
    except ValueError as exc:
        logger.debug("decode rejected %r: %s", payload.code, exc)
        raise invalid_argument(exc) from exc
    return _area_out(area)


@router.post("/shorten", response_model=CodeResponse)
async def shorten_code(
    payload: ShortenRequest,
    fmt: CodeFormat = Depends(get_code_format),
) -> CodeResponse:
    try:
        code = olc.shorten(payload.code, payload.latitude, payload.longitude, fmt=fmt)
    except ValueError as exc:
        logger.debug("shorten rejected %r: %s", payload.code, exc)
        raise invalid_argument(exc) from exc
    return CodeResponse(code=code)


@router.post("/recover", response_model=CodeResponse)
async def recover_code(
    payload: RecoverRequest,
    fmt: CodeFormat = Depends(get_code_format),
    settings: Settings = Depends(get_settings),
) -> CodeResponse:
    code_length = payload.code_length
    if code_length is None:
        code_length = settings.default_code_length
    try:
        code = olc.recover(
            payload.code,
            payload.latitude,
            payload.longitude,
            code_length,
            fmt=fmt,
        )
        area = olc.decode(code, fmt=fmt)
    except ValueError as exc:
        logger.debug("recover rejected %r: %s", payload.code, exc)
        raise invalid_argument(exc, details={"code_length": code_length}) from exc
    return CodeResponse(code=code, area=_area_out(area))


@router.post("/validate", response_model=ValidateResponse)
async def validate_code(
    payload: CodeIn,
    fmt: CodeFormat = Depends(get_code_format),
) -> ValidateResponse:
    return ValidateResponse(
        code=payload.code,
        is_valid=olc.is_valid(payload.code, fmt=fmt),
        is_short=olc.is_short(payload.code, fmt=fmt),
        is_full=olc.is_full(payload.code, fmt=fmt),
        is_padded=olc.is_padded(payload.code, fmt=fmt),
    )


@router.post("/contains", response_model=ContainsResponse)
async def contains_point(
    payload: ContainsRequest,
    fmt: CodeFormat = Depends(get_code_format),
) -> ContainsResponse:
    return ContainsResponse(
        code=payload.code,
        contains=olc.contains(
            payload.code, payload.latitude, payload.longitude, fmt=fmt
        ),
    )
