# FILE: hospital_billing/models/lab.py
from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from hospital_billing.db.base import Base


class LabRequestStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class LabRequest(Base):
    __tablename__ = "lab_requests"
    __table_args__ = {
        "mysql_engine": "InnoDB",
        "mysql_charset": "utf8mb4",
    }

    lab_requestid = Column(Integer, primary_key=True, index=True)
    admissionid = Column(Integer,
                         ForeignKey("admissions.admissionid"),
                         nullable=False,
                         index=True)
    requested_by = Column(Integer, ForeignKey("doctors.doctorid"), nullable=False)
    testid = Column(Integer, ForeignKey("lab_tests.testid"), nullable=False)
    status = Column(String(20), nullable=False, default=LabRequestStatus.PENDING.value)
    request_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    remarks = Column(Text, nullable=True)

    admission = relationship("Admission")
    doctor = relationship("Doctor")
    test = relationship("LabTest")
