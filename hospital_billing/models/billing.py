# FILE: hospital_billing/models/billing.py
from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from hospital_billing.db.base import Base

MYSQL_KW = {
    "mysql_engine": "InnoDB",
    "mysql_charset": "utf8mb4",
}


class BillingStatus(str, Enum):
    PENDING = "Pending"
    PARTIAL = "Partial"
    PAID = "Paid"
    CANCELLED = "Cancelled"


class PaymentMethod(str, Enum):
    CASH = "Cash"
    CREDIT_CARD = "Credit Card"
    DEBIT_CARD = "Debit Card"
    INSURANCE = "Insurance"
    BANK_TRANSFER = "Bank Transfer"


class Billing(Base):
    """
    One billing line against an admission.

    total_amount, insurance_covered_amount, net_amount and
    patient_responsibility are derived columns: services recompute them
    from quantity / unit_price / discount / tax / coverage on every write.
    """
    __tablename__ = "billings"
    __table_args__ = (
        Index("ix_billings_admission_status", "admissionid", "status"),
        MYSQL_KW,
    )

    billingid = Column(Integer, primary_key=True, index=True)
    admissionid = Column(Integer,
                         ForeignKey("admissions.admissionid"),
                         nullable=False,
                         index=True)
    categoryid = Column(Integer,
                        ForeignKey("service_categories.categoryid"),
                        nullable=True)

    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(12, 2), nullable=False, default=0)
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    discount_amount = Column(Numeric(12, 2), nullable=False, default=0)
    tax_amount = Column(Numeric(12, 2), nullable=False, default=0)
    insurance_coverage_percent = Column(Numeric(5, 2), nullable=False, default=0)
    insurance_covered_amount = Column(Numeric(12, 2), nullable=False, default=0)
    net_amount = Column(Numeric(12, 2), nullable=False, default=0)
    patient_responsibility = Column(Numeric(12, 2), nullable=False, default=0)

    status = Column(String(20), nullable=False, default=BillingStatus.PENDING.value)
    billing_date = Column(DateTime, default=datetime.utcnow, nullable=False)

    admission = relationship("Admission", back_populates="billings")
    category = relationship("ServiceCategory")


class Payment(Base):
    __tablename__ = "payments"
    __table_args__ = (
        Index("ix_payments_admission_date", "admission_id", "payment_date"),
        MYSQL_KW,
    )

    payment_id = Column(Integer, primary_key=True, index=True)
    admission_id = Column(Integer,
                          ForeignKey("admissions.admissionid"),
                          nullable=False,
                          index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String(30), nullable=False, default=PaymentMethod.CASH.value)
    insurance_provider = Column(String(199), nullable=True)
    insurance_coverage = Column(Numeric(12, 2), nullable=True)
    payment_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    remarks = Column(Text, nullable=True)

    admission = relationship("Admission", back_populates="payments")
