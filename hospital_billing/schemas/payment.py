# FILE: hospital_billing/schemas/payment.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from hospital_billing.models.billing import PaymentMethod
from hospital_billing.schemas.common import DateRangeQuery, OperationIn


class PaymentListQuery(DateRangeQuery):
    patientid: Optional[int] = None
    payment_method: Optional[PaymentMethod] = None


class AdmissionRefIn(OperationIn):
    admission_id: int


class PaymentIn(OperationIn):
    admission_id: int
    amount: Decimal = Field(gt=0)
    payment_method: PaymentMethod = PaymentMethod.CASH
    insurance_provider: Optional[str] = None
    insurance_coverage: Optional[Decimal] = Field(default=None, ge=0)
    payment_date: Optional[datetime] = None
    remarks: Optional[str] = None


class PaymentUpdateIn(PaymentIn):
    payment_id: int


class PaymentIdIn(OperationIn):
    payment_id: int


class PaymentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    payment_id: int
    admission_id: int
    patientid: Optional[int] = None
    patient_name: Optional[str] = None
    amount: Decimal
    payment_method: str
    insurance_provider: Optional[str] = None
    insurance_coverage: Optional[Decimal] = None
    payment_date: Optional[datetime] = None
    remarks: Optional[str] = None


class PaymentSummaryOut(BaseModel):
    admission_id: int
    patient_name: Optional[str] = None
    total_billed: Decimal
    total_paid: Decimal
    remaining_balance: Decimal
    payment_count: int
