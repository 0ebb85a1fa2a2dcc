# FILE: hospital_billing/api/routes_payments.py
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from hospital_billing.api.deps import get_db
from hospital_billing.api.operations import Operation, dispatch
from hospital_billing.api.response import ok
from hospital_billing.schemas.payment import (
    AdmissionRefIn,
    PaymentIdIn,
    PaymentIn,
    PaymentListQuery,
    PaymentUpdateIn,
)
from hospital_billing.services import payment_service

router = APIRouter(prefix="/transactions", tags=["Payments"])


def _get_all_payments(db: Session, q: PaymentListQuery):
    return ok(payment_service.list_all_payments(db, q))


def _get_payments_by_admission(db: Session, inp: AdmissionRefIn):
    return ok(payment_service.list_payments(db, inp.admission_id))


def _get_payment_summary(db: Session, inp: AdmissionRefIn):
    return ok(payment_service.payment_summary(db, inp.admission_id))


def _insert_payment(db: Session, inp: PaymentIn):
    pay = payment_service.record_payment(db, inp)
    return ok(payment_service.payment_out(db, pay),
              message="Payment recorded successfully",
              status_code=201,
              payment_id=pay.payment_id)


def _update_payment(db: Session, inp: PaymentUpdateIn):
    pay = payment_service.update_payment(db, inp)
    return ok(payment_service.payment_out(db, pay), message="Payment updated successfully")


def _delete_payment(db: Session, inp: PaymentIdIn):
    payment_service.delete_payment(db, inp.payment_id)
    return ok(message="Payment deleted successfully")


OPERATIONS: Dict[str, Operation] = {
    "getAllPayments": Operation(PaymentListQuery, _get_all_payments),
    "getPaymentsByAdmission": Operation(AdmissionRefIn, _get_payments_by_admission),
    "getPaymentSummary": Operation(AdmissionRefIn, _get_payment_summary),
    "insertPayment": Operation(PaymentIn, _insert_payment),
    "updatePayment": Operation(PaymentUpdateIn, _update_payment),
    "deletePayment": Operation(PaymentIdIn, _delete_payment),
}


@router.get("/payment")
def payment_get(request: Request, db: Session = Depends(get_db)):
    return dispatch(OPERATIONS, dict(request.query_params), db)


@router.post("/payment")
def payment_post(
        request: Request,
        body: Optional[Dict[str, Any]] = Body(default=None),
        db: Session = Depends(get_db),
):
    payload = {**dict(request.query_params), **(body or {})}
    return dispatch(OPERATIONS, payload, db)
