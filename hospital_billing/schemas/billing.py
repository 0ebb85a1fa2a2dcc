# FILE: hospital_billing/schemas/billing.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from hospital_billing.schemas.common import DateRangeQuery, OperationIn


class BillingListQuery(DateRangeQuery):
    patientid: Optional[int] = None
    admissionid: Optional[int] = None
    status: Optional[str] = None


class BillingAmountsIn(OperationIn):
    quantity: int = Field(ge=1)
    unit_price: Decimal = Field(ge=0)
    discount_amount: Decimal = Field(default=Decimal("0"), ge=0)
    tax_amount: Decimal = Field(default=Decimal("0"), ge=0)
    insurance_coverage_percent: Decimal = Field(default=Decimal("0"), ge=0, le=100)


class BillingCreateIn(BillingAmountsIn):
    admissionid: int
    categoryid: Optional[int] = None
    status: str = "Pending"


class BillingUpdateIn(BillingAmountsIn):
    # clients also post a precomputed `amount`; it is ignored and recomputed
    billingid: int
    categoryid: Optional[int] = None
    status: str


class BillingIdIn(OperationIn):
    billingid: int


class BillingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    billingid: int
    admissionid: int
    patientid: Optional[int] = None
    patient_name: Optional[str] = None
    categoryid: Optional[int] = None
    category_name: Optional[str] = None

    quantity: int
    unit_price: Decimal
    total_amount: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    insurance_coverage_percent: Decimal
    insurance_covered_amount: Decimal
    net_amount: Decimal
    patient_responsibility: Decimal

    status: str
    billing_date: Optional[datetime] = None
