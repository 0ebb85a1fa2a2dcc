# FILE: hospital_billing/models/prescription.py
from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from hospital_billing.db.base import Base


class PrescriptionStatus(str, Enum):
    PENDING = "Pending"
    DISPENSED = "Dispensed"
    CANCELLED = "Cancelled"
    EXPIRED = "Expired"


class Prescription(Base):
    __tablename__ = "prescriptions"
    __table_args__ = {
        "mysql_engine": "InnoDB",
        "mysql_charset": "utf8mb4",
    }

    prescriptionid = Column(Integer, primary_key=True, index=True)
    admissionid = Column(Integer,
                         ForeignKey("admissions.admissionid"),
                         nullable=False,
                         index=True)
    medicineid = Column(Integer, ForeignKey("medicines.medicineid"), nullable=False)
    doctorid = Column(Integer, ForeignKey("doctors.doctorid"), nullable=False)
    quantity = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default=PrescriptionStatus.PENDING.value)
    prescription_date = Column(DateTime, default=datetime.utcnow, nullable=False)

    admission = relationship("Admission")
    medicine = relationship("Medicine")
    doctor = relationship("Doctor")
