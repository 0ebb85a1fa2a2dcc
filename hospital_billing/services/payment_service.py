# FILE: hospital_billing/services/payment_service.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hospital_billing.models.billing import Billing, BillingStatus, Payment
from hospital_billing.models.ipd import Admission
from hospital_billing.models.patient import Patient
from hospital_billing.schemas.payment import (
    PaymentIn,
    PaymentListQuery,
    PaymentOut,
    PaymentSummaryOut,
    PaymentUpdateIn,
)
from hospital_billing.services.billing_math import money2, remaining_balance
from hospital_billing.services.db_errors import db_failure
from hospital_billing.services.lookups import load, require_admission
from hospital_billing.utils.dates import day_end, day_start, utcnow_naive

logger = logging.getLogger(__name__)


def _get_or_404(db: Session, payment_id: int) -> Payment:
    pay = load(db, Payment, payment_id, "payment")
    if not pay:
        raise HTTPException(status_code=404, detail="Payment not found")
    return pay


def _to_out(pay: Payment, patient: Optional[Patient] = None) -> Dict[str, Any]:
    out = PaymentOut.model_validate(pay).model_dump()
    out["patientid"] = patient.patientid if patient else None
    out["patient_name"] = patient.display_name if patient else None
    return out


def _fill(pay: Payment, inp: PaymentIn) -> None:
    pay.admission_id = inp.admission_id
    pay.amount = money2(inp.amount)
    pay.payment_method = inp.payment_method.value
    pay.insurance_provider = (inp.insurance_provider or None)
    pay.insurance_coverage = (money2(inp.insurance_coverage)
                              if inp.insurance_coverage is not None else None)
    pay.remarks = (inp.remarks or None)
    if inp.payment_date is not None:
        pay.payment_date = inp.payment_date


def _payments_query(db: Session):
    return (db.query(Payment, Patient)
            .join(Admission, Payment.admission_id == Admission.admissionid)
            .join(Patient, Admission.patientid == Patient.patientid))


def list_payments(db: Session, admission_id: int) -> List[Dict[str, Any]]:
    """All payments of one admission (no particular order is promised)."""
    try:
        rows = _payments_query(db).filter(Payment.admission_id == int(admission_id)).all()
    except SQLAlchemyError as e:
        raise db_failure(db, e, "fetching payments") from e
    return [_to_out(p, pt) for p, pt in rows]


def list_all_payments(db: Session, q: PaymentListQuery) -> List[Dict[str, Any]]:
    query = _payments_query(db)
    if q.patientid:
        query = query.filter(Admission.patientid == q.patientid)
    if q.payment_method:
        query = query.filter(Payment.payment_method == q.payment_method.value)
    if q.date_from:
        query = query.filter(Payment.payment_date >= day_start(q.date_from))
    if q.date_to:
        query = query.filter(Payment.payment_date <= day_end(q.date_to))

    try:
        rows = query.order_by(Payment.payment_date.desc(), Payment.payment_id.desc()).all()
    except SQLAlchemyError as e:
        raise db_failure(db, e, "fetching payments") from e
    return [_to_out(p, pt) for p, pt in rows]


def record_payment(db: Session, inp: PaymentIn) -> Payment:
    """
    Append a payment. Cumulative payments are NOT checked against the
    billed total; the remaining balance is informational only.
    """
    require_admission(db, inp.admission_id)

    pay = Payment(payment_date=utcnow_naive())
    _fill(pay, inp)
    try:
        db.add(pay)
        db.commit()
    except SQLAlchemyError as e:
        raise db_failure(db, e, "inserting payment") from e

    db.refresh(pay)
    logger.info("Payment %s recorded for admission %s (%s %s)",
                pay.payment_id, pay.admission_id, pay.payment_method, pay.amount)
    return pay


def update_payment(db: Session, inp: PaymentUpdateIn) -> Payment:
    pay = _get_or_404(db, inp.payment_id)
    if int(inp.admission_id) != int(pay.admission_id):
        require_admission(db, inp.admission_id)

    try:
        _fill(pay, inp)
        db.commit()
    except SQLAlchemyError as e:
        raise db_failure(db, e, "updating payment") from e

    db.refresh(pay)
    logger.info("Payment %s updated", pay.payment_id)
    return pay


def delete_payment(db: Session, payment_id: int) -> None:
    pay = _get_or_404(db, payment_id)
    try:
        db.delete(pay)
        db.commit()
    except SQLAlchemyError as e:
        raise db_failure(db, e, "deleting payment") from e
    logger.info("Payment %s deleted", payment_id)


def payment_summary(db: Session, admission_id: int) -> PaymentSummaryOut:
    adm = load(db, Admission, admission_id, "admission")
    if not adm:
        raise HTTPException(status_code=404, detail="Admission not found")

    try:
        billed = (db.query(func.coalesce(func.sum(Billing.net_amount), 0))
                  .filter(Billing.admissionid == adm.admissionid)
                  .filter(Billing.status != BillingStatus.CANCELLED.value)
                  .scalar())
        paid, count = (db.query(func.coalesce(func.sum(Payment.amount), 0),
                                func.count(Payment.payment_id))
                       .filter(Payment.admission_id == adm.admissionid)
                       .one())
        patient = db.get(Patient, adm.patientid)
    except SQLAlchemyError as e:
        raise db_failure(db, e, "fetching payment summary") from e

    return PaymentSummaryOut(
        admission_id=adm.admissionid,
        patient_name=patient.display_name if patient else None,
        total_billed=money2(billed),
        total_paid=money2(paid),
        remaining_balance=remaining_balance(billed, paid),
        payment_count=int(count or 0),
    )


def payment_out(db: Session, pay: Payment) -> Dict[str, Any]:
    try:
        adm = db.get(Admission, pay.admission_id)
        patient = db.get(Patient, adm.patientid) if adm else None
    except SQLAlchemyError as e:
        raise db_failure(db, e, "fetching payment") from e
    return _to_out(pay, patient)
