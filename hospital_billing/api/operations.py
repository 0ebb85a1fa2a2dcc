# FILE: hospital_billing/api/operations.py
"""
Operation-tagged dispatch.

Every transaction endpoint takes an `operation` key (query string on GET,
JSON body on POST) naming the action. Each action declares the Pydantic
schema its payload must satisfy and a handler `(db, inp) -> JSONResponse`.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, NamedTuple, Optional, Type

from fastapi import HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session


class Operation(NamedTuple):
    schema: Optional[Type[BaseModel]]
    handler: Callable[[Session, Any], JSONResponse]


def dispatch(operations: Mapping[str, Operation], payload: Dict[str, Any],
             db: Session) -> JSONResponse:
    op_name = payload.get("operation")
    if not op_name:
        raise HTTPException(status_code=400, detail="Operation required")

    op = operations.get(str(op_name))
    if op is None:
        raise HTTPException(status_code=400, detail="Invalid operation")

    inp = None
    if op.schema is not None:
        try:
            inp = op.schema.model_validate(payload)
        except ValidationError as e:
            raise RequestValidationError(
                e.errors(include_url=False, include_context=False)) from e
    return op.handler(db, inp)
