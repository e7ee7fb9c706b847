from __future__ import annotations

import dataclasses
from typing import Any


@dataclasses.dataclass(slots=True)
class APIError(Exception):
    """Business error that must map to the standard error envelope."""

    code: str
    message: str
    status_code: int = 400
    details: Any | None = None


def invalid_argument(exc: ValueError, *, details: Any | None = None) -> APIError:
    """Wrap a codec ValueError (bad code, length or reference point)."""

    return APIError(
        code="OLC_INVALID_ARGUMENT",
        message=str(exc),
        status_code=400,
        details=details,
    )


def make_error_payload(
    *, code: str, message: str, trace_id: str | None, details: Any | None
) -> dict[str, Any]:
    return {
        "code": code,
        "message": message,
        "details": details,
        "trace_id": trace_id,
    }
