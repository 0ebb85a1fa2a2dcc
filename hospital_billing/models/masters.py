# FILE: hospital_billing/models/masters.py
from sqlalchemy import Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from hospital_billing.db.base import Base

MYSQL_KW = {
    "mysql_engine": "InnoDB",
    "mysql_charset": "utf8mb4",
}


class Doctor(Base):
    __tablename__ = "doctors"
    __table_args__ = MYSQL_KW

    doctorid = Column(Integer, primary_key=True, index=True)
    fullname = Column(String(199), nullable=False)
    specialization = Column(String(120), nullable=True)


class Medicine(Base):
    __tablename__ = "medicines"
    __table_args__ = MYSQL_KW

    medicineid = Column(Integer, primary_key=True, index=True)
    brand_name = Column(String(199), nullable=False)
    generic_name = Column(String(199), nullable=True)
    unit_price = Column(Numeric(12, 2), nullable=False, default=0)


class LabTestCategory(Base):
    __tablename__ = "lab_test_categories"
    __table_args__ = MYSQL_KW

    categoryid = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), unique=True, nullable=False)

    tests = relationship("LabTest", back_populates="category")


class LabTest(Base):
    __tablename__ = "lab_tests"
    __table_args__ = MYSQL_KW

    testid = Column(Integer, primary_key=True, index=True)
    name = Column(String(199), nullable=False)
    categoryid = Column(Integer,
                        ForeignKey("lab_test_categories.categoryid"),
                        nullable=True,
                        index=True)
    price = Column(Numeric(12, 2), nullable=False, default=0)

    category = relationship("LabTestCategory", back_populates="tests")


class ServiceCategory(Base):
    """Billing line category (Room, Pharmacy, Laboratory, Professional fee ...)."""
    __tablename__ = "service_categories"
    __table_args__ = MYSQL_KW

    categoryid = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), unique=True, nullable=False)
