# FILE: hospital_billing/services/prescription_service.py
from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hospital_billing.models.ipd import Admission, AdmissionStatus
from hospital_billing.models.masters import Doctor, Medicine
from hospital_billing.models.patient import Patient
from hospital_billing.models.prescription import Prescription, PrescriptionStatus
from hospital_billing.schemas.prescription import (
    PrescriptionCreateIn,
    PrescriptionOut,
    PrescriptionUpdateIn,
)
from hospital_billing.services.db_errors import db_failure
from hospital_billing.services.lookups import (
    load,
    require_admission,
    require_doctor,
    require_medicine,
)
from hospital_billing.services.status_flow import PRESCRIPTION_FLOW, ensure_transition
from hospital_billing.utils.dates import utcnow_naive

logger = logging.getLogger(__name__)


def _get_or_404(db: Session, prescriptionid: int) -> Prescription:
    rx = load(db, Prescription, prescriptionid, "prescription")
    if not rx:
        raise HTTPException(status_code=404, detail="Prescription not found")
    return rx


def list_prescriptions(db: Session) -> List[Dict[str, Any]]:
    """Prescriptions of currently admitted patients, newest first."""
    try:
        rows = (db.query(Prescription, Patient, Medicine, Doctor)
                .join(Admission, Prescription.admissionid == Admission.admissionid)
                .join(Patient, Admission.patientid == Patient.patientid)
                .join(Medicine, Prescription.medicineid == Medicine.medicineid)
                .join(Doctor, Prescription.doctorid == Doctor.doctorid)
                .filter(Admission.status == AdmissionStatus.ADMITTED.value)
                .order_by(Prescription.prescription_date.desc(),
                          Prescription.prescriptionid.desc())
                .all())
    except SQLAlchemyError as e:
        raise db_failure(db, e, "fetching prescriptions") from e

    out = []
    for rx, patient, med, doc in rows:
        item = PrescriptionOut.model_validate(rx).model_dump()
        item["patient_name"] = patient.display_name
        item["medicine_name"] = med.brand_name
        item["doctor_name"] = doc.fullname
        out.append(item)
    return out


def create_prescription(db: Session, inp: PrescriptionCreateIn) -> Prescription:
    """
    Admission must be Admitted and medicine/doctor must exist; any failure
    rolls back and persists nothing.
    """
    try:
        require_admission(db, inp.admissionid, admitted_only=True)
        require_medicine(db, inp.medicineid)
        require_doctor(db, inp.doctorid)

        rx = Prescription(
            admissionid=inp.admissionid,
            medicineid=inp.medicineid,
            doctorid=inp.doctorid,
            quantity=inp.quantity,
            status=PrescriptionStatus.PENDING.value,
            prescription_date=utcnow_naive(),
        )
        db.add(rx)
        db.commit()
    except HTTPException as e:
        db.rollback()
        if e.status_code < 500:
            logger.warning("Prescription rejected for admission %s: %s", inp.admissionid, e.detail)
        raise
    except SQLAlchemyError as e:
        raise db_failure(db, e, "inserting prescription") from e

    db.refresh(rx)
    logger.info("Prescription %s created for admission %s", rx.prescriptionid, rx.admissionid)
    return rx


def update_prescription(db: Session, inp: PrescriptionUpdateIn) -> Prescription:
    rx = _get_or_404(db, inp.prescriptionid)
    st = ensure_transition(PRESCRIPTION_FLOW, rx.status, inp.status, label="prescription")

    try:
        rx.medicineid = inp.medicineid
        rx.doctorid = inp.doctorid
        rx.quantity = inp.quantity
        rx.status = st.value
        db.commit()
    except SQLAlchemyError as e:
        raise db_failure(db, e, "updating prescription") from e

    db.refresh(rx)
    logger.info("Prescription %s updated (status=%s)", rx.prescriptionid, rx.status)
    return rx


def delete_prescription(db: Session, prescriptionid: int) -> None:
    rx = _get_or_404(db, prescriptionid)
    try:
        db.delete(rx)
        db.commit()
    except SQLAlchemyError as e:
        raise db_failure(db, e, "deleting prescription") from e
    logger.info("Prescription %s deleted", prescriptionid)
