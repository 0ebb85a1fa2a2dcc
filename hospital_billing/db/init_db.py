# hospital_billing/db/init_db.py
from __future__ import annotations

import argparse
import logging
from decimal import Decimal

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hospital_billing.db.session import engine
from hospital_billing.db.base import Base

# Import all models so metadata is complete
from hospital_billing.models import (  # noqa: F401
    Admission, AdmissionStatus, Doctor, LabTest, LabTestCategory, Medicine,
    Patient, ServiceCategory, Billing, Payment, Prescription, LabRequest)

logger = logging.getLogger(__name__)

SERVICE_CATEGORIES = [
    "Room & Board",
    "Professional Fee",
    "Pharmacy",
    "Laboratory",
    "Radiology",
    "Procedure",
    "Miscellaneous",
]

LAB_TESTS = [
    ("Hematology", "Complete Blood Count", "350.00"),
    ("Hematology", "Platelet Count", "200.00"),
    ("Clinical Chemistry", "Fasting Blood Sugar", "150.00"),
    ("Clinical Chemistry", "Lipid Profile", "600.00"),
    ("Microscopy", "Urinalysis", "120.00"),
]


def create_tables(bind: Engine = engine, *, fresh: bool = False) -> None:
    if fresh:
        logger.warning("Dropping ALL tables (dev only) ...")
        Base.metadata.drop_all(bind=bind)
    Base.metadata.create_all(bind=bind)
    logger.info("Tables: %s", sorted(inspect(bind).get_table_names()))


def seed_masters(db: Session) -> None:
    """
    Seed ONLY missing service / lab categories and tests; safe to run multiple times.
    """
    for name in SERVICE_CATEGORIES:
        if not db.query(ServiceCategory).filter(ServiceCategory.name == name).first():
            db.add(ServiceCategory(name=name))

    for cat_name, test_name, price in LAB_TESTS:
        cat = db.query(LabTestCategory).filter(LabTestCategory.name == cat_name).first()
        if not cat:
            cat = LabTestCategory(name=cat_name)
            db.add(cat)
            db.flush()
        exists = (db.query(LabTest).filter(LabTest.name == test_name)
                  .filter(LabTest.categoryid == cat.categoryid).first())
        if not exists:
            db.add(LabTest(name=test_name, categoryid=cat.categoryid, price=Decimal(price)))


def seed_demo(db: Session) -> None:
    """One admitted patient with a doctor and a medicine, for local clicking around."""
    if db.query(Patient).first():
        return
    patient = Patient(firstname="Juan", middlename="Santos", lastname="Dela Cruz")
    db.add(patient)
    db.add(Doctor(fullname="Dr. Maria Reyes", specialization="Internal Medicine"))
    db.add(Medicine(brand_name="Biogesic", generic_name="Paracetamol", unit_price=Decimal("5.50")))
    db.flush()
    db.add(Admission(patientid=patient.patientid, status=AdmissionStatus.ADMITTED.value))


def run(fresh: bool = False, demo: bool = False) -> None:
    create_tables(fresh=fresh)
    try:
        with Session(engine) as db:
            seed_masters(db)
            if demo:
                seed_demo(db)
            db.commit()
            logger.info("Master data seeded (missing rows inserted).")
    except SQLAlchemyError:
        logger.exception("Seeding failed")
        raise


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    parser = argparse.ArgumentParser(
        description="Initialize DB (create tables, seed master data).")
    parser.add_argument(
        "--fresh",
        action="store_true",
        help="Drop & recreate all tables (DEV ONLY).",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Also insert a demo patient, doctor, medicine and admission.",
    )
    args = parser.parse_args()
    run(fresh=args.fresh, demo=args.demo)
