# FILE: hospital_billing/schemas/prescription.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from hospital_billing.schemas.common import OperationIn


class PrescriptionCreateIn(OperationIn):
    admissionid: int
    medicineid: int
    doctorid: int
    quantity: int = Field(ge=1)


class PrescriptionUpdateIn(OperationIn):
    prescriptionid: int
    medicineid: int
    doctorid: int
    quantity: int = Field(ge=1)
    status: str


class PrescriptionIdIn(OperationIn):
    prescriptionid: int


class PrescriptionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    prescriptionid: int
    admissionid: int
    medicineid: int
    doctorid: int
    quantity: int
    status: str
    prescription_date: Optional[datetime] = None
    patient_name: Optional[str] = None
    medicine_name: Optional[str] = None
    doctor_name: Optional[str] = None
