# FILE: hospital_billing/api/exception_handlers.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hospital_billing.api.response import err

logger = logging.getLogger(__name__)


def _validation_summary(errors) -> str:
    if any(e.get("type") == "missing" for e in errors):
        return "Missing required fields"
    if errors:
        e = errors[0]
        field = ".".join(str(p) for p in e.get("loc", ()) if p != "body")
        return f"{field}: {e.get('msg')}" if field else str(e.get("msg"))
    return "Validation error"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # exc.detail can be str/dict/list
        msg = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return err(msg=msg, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        details = [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors]
        logger.warning("Validation failed on %s: %s", request.url.path, details)
        return err(msg=_validation_summary(errors), status_code=422, details=details)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s", request.url.path)
        return err(msg="Internal server error", status_code=500)
