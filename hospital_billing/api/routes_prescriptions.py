# FILE: hospital_billing/api/routes_prescriptions.py
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from hospital_billing.api.deps import get_db
from hospital_billing.api.operations import Operation, dispatch
from hospital_billing.api.response import ok
from hospital_billing.schemas.prescription import (
    PrescriptionCreateIn,
    PrescriptionIdIn,
    PrescriptionUpdateIn,
)
from hospital_billing.services import prescription_service

router = APIRouter(prefix="/transactions", tags=["Prescriptions"])


def _get_all(db: Session, _inp=None):
    return ok(prescription_service.list_prescriptions(db))


def _insert(db: Session, inp: PrescriptionCreateIn):
    rx = prescription_service.create_prescription(db, inp)
    return ok({"prescriptionid": rx.prescriptionid},
              message="Prescription created successfully",
              status_code=201,
              prescriptionid=rx.prescriptionid)


def _update(db: Session, inp: PrescriptionUpdateIn):
    prescription_service.update_prescription(db, inp)
    return ok(message="Prescription updated successfully")


def _delete(db: Session, inp: PrescriptionIdIn):
    prescription_service.delete_prescription(db, inp.prescriptionid)
    return ok(message="Prescription deleted successfully")


OPERATIONS: Dict[str, Operation] = {
    "getAllPrescriptions": Operation(None, _get_all),
    "insertPrescription": Operation(PrescriptionCreateIn, _insert),
    "updatePrescription": Operation(PrescriptionUpdateIn, _update),
    "deletePrescription": Operation(PrescriptionIdIn, _delete),
}


@router.get("/prescription")
def prescription_get(request: Request, db: Session = Depends(get_db)):
    return dispatch(OPERATIONS, dict(request.query_params), db)


@router.post("/prescription")
def prescription_post(
        request: Request,
        body: Optional[Dict[str, Any]] = Body(default=None),
        db: Session = Depends(get_db),
):
    payload = {**dict(request.query_params), **(body or {})}
    return dispatch(OPERATIONS, payload, db)
