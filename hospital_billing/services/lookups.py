# hospital_billing/services/lookups.py
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hospital_billing.models.ipd import Admission, AdmissionStatus
from hospital_billing.models.masters import Doctor, LabTest, Medicine, ServiceCategory
from hospital_billing.services.db_errors import db_failure


def load(db: Session, model, pk: int, what: str):
    """`db.get` with driver errors turned into the usual 500."""
    try:
        return db.get(model, int(pk))
    except SQLAlchemyError as e:
        raise db_failure(db, e, f"fetching {what}") from e


def require_admission(db: Session, admissionid: int, *,
                      admitted_only: bool = False) -> Admission:
    adm: Optional[Admission] = load(db, Admission, admissionid, "admission")
    if not adm:
        raise HTTPException(status_code=422, detail="Invalid admission")
    if admitted_only and adm.status != AdmissionStatus.ADMITTED.value:
        raise HTTPException(status_code=422, detail="Invalid or inactive admission")
    return adm


def require_doctor(db: Session, doctorid: int) -> None:
    if load(db, Doctor, doctorid, "doctor") is None:
        raise HTTPException(status_code=422, detail="Invalid doctor")


def require_medicine(db: Session, medicineid: int) -> None:
    if load(db, Medicine, medicineid, "medicine") is None:
        raise HTTPException(status_code=422, detail="Invalid medicine")


def require_lab_test(db: Session, testid: int) -> None:
    if load(db, LabTest, testid, "lab test") is None:
        raise HTTPException(status_code=422, detail="Invalid test")


def require_service_category(db: Session, categoryid: Optional[int]) -> None:
    if categoryid is None:
        return
    if load(db, ServiceCategory, categoryid, "billing category") is None:
        raise HTTPException(status_code=422, detail="Invalid billing category")
