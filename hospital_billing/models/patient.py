# FILE: hospital_billing/models/patient.py
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from hospital_billing.db.base import Base


class Patient(Base):
    __tablename__ = "patients"
    __table_args__ = {
        "mysql_engine": "InnoDB",
        "mysql_charset": "utf8mb4",
        "mysql_collate": "utf8mb4_unicode_ci",
    }

    patientid = Column(Integer, primary_key=True, index=True)
    firstname = Column(String(120), nullable=False)
    middlename = Column(String(120), nullable=True)
    lastname = Column(String(120), nullable=False)
    suffix = Column(String(20), nullable=True)

    admissions = relationship("Admission", back_populates="patient")

    @property
    def display_name(self) -> str:
        # "Last, First Middle Suffix"
        rest = " ".join(p for p in (self.firstname, self.middlename, self.suffix) if p)
        return f"{self.lastname}, {rest}".strip()
