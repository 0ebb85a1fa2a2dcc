# FILE: hospital_billing/models/ipd.py
from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from hospital_billing.db.base import Base


class AdmissionStatus(str, Enum):
    ADMITTED = "Admitted"
    DISCHARGED = "Discharged"
    TRANSFERRED = "Transferred"


class Admission(Base):
    __tablename__ = "admissions"
    __table_args__ = (
        Index("ix_admissions_patient_status", "patientid", "status"),
        {
            "mysql_engine": "InnoDB",
            "mysql_charset": "utf8mb4",
        },
    )

    admissionid = Column(Integer, primary_key=True, index=True)
    patientid = Column(Integer,
                       ForeignKey("patients.patientid"),
                       nullable=False,
                       index=True)
    admission_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    discharge_date = Column(DateTime, nullable=True)
    status = Column(String(20),
                    nullable=False,
                    default=AdmissionStatus.ADMITTED.value)

    patient = relationship("Patient", back_populates="admissions")
    billings = relationship("Billing", back_populates="admission")
    payments = relationship("Payment", back_populates="admission")
