# FILE: hospital_billing/api/response.py
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def ok(
    data: Any = None,
    *,
    message: Optional[str] = None,
    status_code: int = 200,
    **extra: Any,
) -> JSONResponse:
    """
    Standard success wrapper:
    {
      "success": true,
      "data": ...,
      "message": "..." (optional),
      ...extra keys (e.g. "billingid" of a new row)
    }
    """
    payload: Dict[str, Any] = {"success": True, "data": data}
    if message is not None:
        payload["message"] = message
    payload.update(extra)

    # jsonable_encoder converts datetime/Decimal/Enum to JSON-safe types
    return JSONResponse(status_code=status_code, content=jsonable_encoder(payload))


def err(
    msg: str = "Something went wrong",
    *,
    status_code: int = 400,
    details: Any = None,
) -> JSONResponse:
    """
    Standard error wrapper:
    {
      "success": false,
      "error": "...",
      "details": ... (optional)
    }
    """
    payload: Dict[str, Any] = {"success": False, "error": msg}
    if details is not None:
        payload["details"] = details
    return JSONResponse(status_code=status_code, content=jsonable_encoder(payload))
