# FILE: hospital_billing/api/routes_billing.py
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from hospital_billing.api.deps import get_db
from hospital_billing.api.operations import Operation, dispatch
from hospital_billing.api.response import ok
from hospital_billing.schemas.billing import (
    BillingCreateIn,
    BillingIdIn,
    BillingListQuery,
    BillingUpdateIn,
)
from hospital_billing.services import billing_service

router = APIRouter(prefix="/transactions", tags=["Billing"])


def _get_billings(db: Session, q: BillingListQuery):
    return ok(billing_service.list_billings(db, q))


def _insert_billing(db: Session, inp: BillingCreateIn):
    row = billing_service.create_billing(db, inp)
    return ok(billing_service.billing_out(db, row),
              message="Billing created successfully",
              status_code=201,
              billingid=row.billingid)


def _update_billing(db: Session, inp: BillingUpdateIn):
    row = billing_service.update_billing(db, inp)
    return ok(billing_service.billing_out(db, row), message="Billing updated successfully")


def _delete_billing(db: Session, inp: BillingIdIn):
    billing_service.delete_billing(db, inp.billingid)
    return ok(message="Billing deleted successfully")


OPERATIONS: Dict[str, Operation] = {
    "getBillings": Operation(BillingListQuery, _get_billings),
    "insertBilling": Operation(BillingCreateIn, _insert_billing),
    "updateBilling": Operation(BillingUpdateIn, _update_billing),
    "deleteBilling": Operation(BillingIdIn, _delete_billing),
}


@router.get("/billing")
def billing_get(request: Request, db: Session = Depends(get_db)):
    return dispatch(OPERATIONS, dict(request.query_params), db)


@router.post("/billing")
def billing_post(
        request: Request,
        body: Optional[Dict[str, Any]] = Body(default=None),
        db: Session = Depends(get_db),
):
    payload = {**dict(request.query_params), **(body or {})}
    return dispatch(OPERATIONS, payload, db)
