# File: hospital_billing/services/billing_service.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hospital_billing.models.billing import Billing, BillingStatus
from hospital_billing.models.ipd import Admission
from hospital_billing.models.masters import ServiceCategory
from hospital_billing.models.patient import Patient
from hospital_billing.schemas.billing import (
    BillingCreateIn,
    BillingListQuery,
    BillingOut,
    BillingUpdateIn,
)
from hospital_billing.services.billing_math import compute_billing_amounts
from hospital_billing.services.db_errors import db_failure
from hospital_billing.services.lookups import load, require_admission, require_service_category
from hospital_billing.services.status_flow import BILLING_FLOW, ensure_transition, parse_status
from hospital_billing.utils.dates import day_end, day_start, utcnow_naive

logger = logging.getLogger(__name__)


def _get_or_404(db: Session, billingid: int) -> Billing:
    row = load(db, Billing, billingid, "billing")
    if not row:
        raise HTTPException(status_code=404, detail="Billing not found")
    return row


def _apply_amounts(row: Billing, inp) -> None:
    """Derived columns always come from the inputs, never from the client."""
    amounts = compute_billing_amounts(
        inp.quantity,
        inp.unit_price,
        inp.discount_amount,
        inp.tax_amount,
        inp.insurance_coverage_percent,
    )
    row.quantity = int(inp.quantity)
    for field, value in amounts.items():
        setattr(row, field, value)


def _to_out(row: Billing, adm: Optional[Admission], patient: Optional[Patient],
            category: Optional[ServiceCategory]) -> Dict[str, Any]:
    out = BillingOut.model_validate(row).model_dump()
    out["patientid"] = adm.patientid if adm else None
    out["patient_name"] = patient.display_name if patient else None
    out["category_name"] = category.name if category else None
    # the list page filters on the display label
    out["status_label"] = row.status
    return out


def list_billings(db: Session, q: BillingListQuery) -> List[Dict[str, Any]]:
    query = (db.query(Billing, Admission, Patient, ServiceCategory)
             .join(Admission, Billing.admissionid == Admission.admissionid)
             .join(Patient, Admission.patientid == Patient.patientid)
             .outerjoin(ServiceCategory, Billing.categoryid == ServiceCategory.categoryid))

    if q.patientid:
        query = query.filter(Admission.patientid == q.patientid)
    if q.admissionid:
        query = query.filter(Billing.admissionid == q.admissionid)
    if q.status:
        st = parse_status(BillingStatus, q.status)
        if st is None:
            return []
        query = query.filter(Billing.status == st.value)
    if q.date_from:
        query = query.filter(Billing.billing_date >= day_start(q.date_from))
    if q.date_to:
        query = query.filter(Billing.billing_date <= day_end(q.date_to))

    try:
        rows = query.order_by(Billing.billing_date.desc(), Billing.billingid.desc()).all()
    except SQLAlchemyError as e:
        raise db_failure(db, e, "fetching billings") from e
    return [_to_out(b, a, p, c) for b, a, p, c in rows]


def create_billing(db: Session, inp: BillingCreateIn) -> Billing:
    require_admission(db, inp.admissionid)
    require_service_category(db, inp.categoryid)

    st = parse_status(BillingStatus, inp.status)
    if st is None:
        raise HTTPException(status_code=422, detail=f"Invalid billing status: {inp.status}")

    row = Billing(
        admissionid=inp.admissionid,
        categoryid=inp.categoryid,
        status=st.value,
        billing_date=utcnow_naive(),
    )
    _apply_amounts(row, inp)

    try:
        db.add(row)
        db.commit()
    except SQLAlchemyError as e:
        raise db_failure(db, e, "inserting billing") from e

    db.refresh(row)
    logger.info("Billing %s created for admission %s (net=%s)",
                row.billingid, row.admissionid, row.net_amount)
    return row


def update_billing(db: Session, inp: BillingUpdateIn) -> Billing:
    row = _get_or_404(db, inp.billingid)
    require_service_category(db, inp.categoryid)
    st = ensure_transition(BILLING_FLOW, row.status, inp.status, label="billing")

    try:
        if inp.categoryid is not None:
            row.categoryid = inp.categoryid
        row.status = st.value
        _apply_amounts(row, inp)
        db.commit()
    except SQLAlchemyError as e:
        raise db_failure(db, e, "updating billing") from e

    db.refresh(row)
    logger.info("Billing %s updated (status=%s net=%s)", row.billingid, row.status, row.net_amount)
    return row


def delete_billing(db: Session, billingid: int) -> None:
    row = _get_or_404(db, billingid)
    try:
        db.delete(row)
        db.commit()
    except SQLAlchemyError as e:
        raise db_failure(db, e, "deleting billing") from e
    logger.info("Billing %s deleted", billingid)


def billing_out(db: Session, row: Billing) -> Dict[str, Any]:
    try:
        adm = db.get(Admission, row.admissionid)
        patient = db.get(Patient, adm.patientid) if adm else None
        category = db.get(ServiceCategory, row.categoryid) if row.categoryid else None
    except SQLAlchemyError as e:
        raise db_failure(db, e, "fetching billing") from e
    return _to_out(row, adm, patient, category)
