# FILE: hospital_billing/services/lab_request_service.py
from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hospital_billing.models.ipd import Admission
from hospital_billing.models.lab import LabRequest, LabRequestStatus
from hospital_billing.models.masters import Doctor, LabTest, LabTestCategory
from hospital_billing.models.patient import Patient
from hospital_billing.schemas.lab_request import (
    LabRequestCreateIn,
    LabRequestListQuery,
    LabRequestOut,
    LabRequestUpdateIn,
)
from hospital_billing.services.db_errors import db_failure
from hospital_billing.services.lookups import (
    load,
    require_admission,
    require_doctor,
    require_lab_test,
)
from hospital_billing.services.status_flow import LAB_REQUEST_FLOW, ensure_transition, parse_status
from hospital_billing.utils.dates import day_end, day_start, utcnow_naive

logger = logging.getLogger(__name__)


def _get_or_404(db: Session, lab_requestid: int) -> LabRequest:
    lr = load(db, LabRequest, lab_requestid, "lab request")
    if not lr:
        raise HTTPException(status_code=404, detail="Lab request not found")
    return lr


def list_lab_requests(db: Session, q: LabRequestListQuery) -> List[Dict[str, Any]]:
    query = (db.query(LabRequest, Admission, Patient, Doctor, LabTest, LabTestCategory)
             .join(Admission, LabRequest.admissionid == Admission.admissionid)
             .join(Patient, Admission.patientid == Patient.patientid)
             .join(Doctor, LabRequest.requested_by == Doctor.doctorid)
             .join(LabTest, LabRequest.testid == LabTest.testid)
             .outerjoin(LabTestCategory, LabTest.categoryid == LabTestCategory.categoryid))

    if q.patientid:
        query = query.filter(Admission.patientid == q.patientid)
    if q.doctorid:
        query = query.filter(LabRequest.requested_by == q.doctorid)
    if q.testid:
        query = query.filter(LabRequest.testid == q.testid)
    if q.status:
        st = parse_status(LabRequestStatus, q.status)
        if st is None:
            return []
        query = query.filter(LabRequest.status == st.value)
    if q.date_from:
        query = query.filter(LabRequest.request_date >= day_start(q.date_from))
    if q.date_to:
        query = query.filter(LabRequest.request_date <= day_end(q.date_to))

    try:
        rows = (query.order_by(LabRequest.request_date.desc(), LabRequest.lab_requestid.desc())
                .all())
    except SQLAlchemyError as e:
        raise db_failure(db, e, "fetching lab requests") from e

    out = []
    for lr, adm, patient, doc, test, cat in rows:
        item = LabRequestOut.model_validate(lr).model_dump()
        item["patientid"] = adm.patientid
        item["patient_name"] = patient.display_name
        # the request form reads the doctor back under both names
        item["doctorid"] = lr.requested_by
        item["requestedBy"] = lr.requested_by
        item["doctor_name"] = doc.fullname
        item["test_name"] = test.name
        item["category_name"] = cat.name if cat else None
        out.append(item)
    return out


def create_lab_request(db: Session, inp: LabRequestCreateIn) -> LabRequest:
    """References are validated here only; updates do not re-check them."""
    try:
        require_admission(db, inp.admissionid)
        require_doctor(db, inp.requested_by)
        require_lab_test(db, inp.testid)

        lr = LabRequest(
            admissionid=inp.admissionid,
            requested_by=inp.requested_by,
            testid=inp.testid,
            remarks=(inp.remarks or None),
            status=LabRequestStatus.PENDING.value,
            request_date=utcnow_naive(),
        )
        db.add(lr)
        db.commit()
    except HTTPException as e:
        db.rollback()
        if e.status_code < 500:
            logger.warning("Lab request rejected for admission %s: %s", inp.admissionid, e.detail)
        raise
    except SQLAlchemyError as e:
        raise db_failure(db, e, "inserting lab request") from e

    db.refresh(lr)
    logger.info("Lab request %s created for admission %s", lr.lab_requestid, lr.admissionid)
    return lr


def update_lab_request(db: Session, inp: LabRequestUpdateIn) -> LabRequest:
    lr = _get_or_404(db, inp.lab_requestid)
    st = ensure_transition(LAB_REQUEST_FLOW, lr.status, inp.status, label="lab request")

    try:
        lr.admissionid = inp.admissionid
        lr.requested_by = inp.requested_by
        lr.testid = inp.testid
        lr.remarks = (inp.remarks or None)
        lr.status = st.value
        db.commit()
    except SQLAlchemyError as e:
        raise db_failure(db, e, "updating lab request") from e

    db.refresh(lr)
    logger.info("Lab request %s updated (status=%s)", lr.lab_requestid, lr.status)
    return lr


def delete_lab_request(db: Session, lab_requestid: int) -> None:
    lr = _get_or_404(db, lab_requestid)
    try:
        db.delete(lr)
        db.commit()
    except SQLAlchemyError as e:
        raise db_failure(db, e, "deleting lab request") from e
    logger.info("Lab request %s deleted", lab_requestid)
