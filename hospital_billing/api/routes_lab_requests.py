# FILE: hospital_billing/api/routes_lab_requests.py
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from hospital_billing.api.deps import get_db
from hospital_billing.api.operations import Operation, dispatch
from hospital_billing.api.response import ok
from hospital_billing.schemas.lab_request import (
    LabRequestCreateIn,
    LabRequestIdIn,
    LabRequestListQuery,
    LabRequestUpdateIn,
)
from hospital_billing.services import lab_request_service

router = APIRouter(prefix="/transactions", tags=["Lab Requests"])


def _get_all(db: Session, q: LabRequestListQuery):
    return ok(lab_request_service.list_lab_requests(db, q))


def _insert(db: Session, inp: LabRequestCreateIn):
    lr = lab_request_service.create_lab_request(db, inp)
    return ok({"lab_requestid": lr.lab_requestid},
              message="Lab request created successfully",
              status_code=201,
              lab_requestid=lr.lab_requestid)


def _update(db: Session, inp: LabRequestUpdateIn):
    lab_request_service.update_lab_request(db, inp)
    return ok(message="Lab request updated successfully")


def _delete(db: Session, inp: LabRequestIdIn):
    lab_request_service.delete_lab_request(db, inp.lab_requestid)
    return ok(message="Lab request deleted successfully")


OPERATIONS: Dict[str, Operation] = {
    "getAllLabRequests": Operation(LabRequestListQuery, _get_all),
    "insertLabRequest": Operation(LabRequestCreateIn, _insert),
    "updateLabRequest": Operation(LabRequestUpdateIn, _update),
    "deleteLabRequest": Operation(LabRequestIdIn, _delete),
}


@router.get("/lab_request")
def lab_request_get(request: Request, db: Session = Depends(get_db)):
    return dispatch(OPERATIONS, dict(request.query_params), db)


@router.post("/lab_request")
def lab_request_post(
        request: Request,
        body: Optional[Dict[str, Any]] = Body(default=None),
        db: Session = Depends(get_db),
):
    payload = {**dict(request.query_params), **(body or {})}
    return dispatch(OPERATIONS, payload, db)
