# FILE: hospital_billing/schemas/lab_request.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from hospital_billing.schemas.common import DateRangeQuery, OperationIn


class LabRequestListQuery(DateRangeQuery):
    patientid: Optional[int] = None
    doctorid: Optional[int] = None
    testid: Optional[int] = None
    status: Optional[str] = None


class LabRequestCreateIn(OperationIn):
    admissionid: int
    # the request form posts the doctor as `requestedBy`
    requested_by: int = Field(alias="requestedBy")
    testid: int
    remarks: Optional[str] = None


class LabRequestUpdateIn(LabRequestCreateIn):
    lab_requestid: int
    status: str


class LabRequestIdIn(OperationIn):
    lab_requestid: int


class LabRequestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    lab_requestid: int
    admissionid: int
    patientid: Optional[int] = None
    patient_name: Optional[str] = None
    requested_by: int
    doctor_name: Optional[str] = None
    testid: int
    test_name: Optional[str] = None
    category_name: Optional[str] = None
    status: str
    request_date: Optional[datetime] = None
    remarks: Optional[str] = None
