import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from hospital_billing.api.deps import get_db
from hospital_billing.db.base import Base
from hospital_billing.db.session import make_engine
from hospital_billing.main import app
from hospital_billing.models import (
    Admission,
    AdmissionStatus,
    Doctor,
    LabTest,
    LabTestCategory,
    Medicine,
    Patient,
    ServiceCategory,
)

engine = make_engine("sqlite://")
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seed(db):
    """Ids of one admitted and one discharged admission plus the master rows they need."""
    patient = Patient(firstname="Ana", middlename="Lopez", lastname="Garcia")
    other = Patient(firstname="Ben", lastname="Cruz")
    doctor = Doctor(fullname="Dr. Rosa Lim", specialization="Pediatrics")
    medicine = Medicine(brand_name="Amoxil", generic_name="Amoxicillin", unit_price=Decimal("12.00"))
    lab_cat = LabTestCategory(name="Hematology")
    svc = ServiceCategory(name="Room & Board")
    db.add_all([patient, other, doctor, medicine, lab_cat, svc])
    db.flush()

    test = LabTest(name="Complete Blood Count", categoryid=lab_cat.categoryid, price=Decimal("350.00"))
    admitted = Admission(patientid=patient.patientid, status=AdmissionStatus.ADMITTED.value,
                         admission_date=datetime(2026, 10, 1, 8, 0))
    discharged = Admission(patientid=other.patientid, status=AdmissionStatus.DISCHARGED.value,
                           admission_date=datetime(2026, 9, 1, 8, 0),
                           discharge_date=datetime(2026, 9, 5, 12, 0))
    db.add_all([test, admitted, discharged])
    db.commit()

    return {
        "patientid": patient.patientid,
        "other_patientid": other.patientid,
        "doctorid": doctor.doctorid,
        "medicineid": medicine.medicineid,
        "testid": test.testid,
        "categoryid": svc.categoryid,
        "admissionid": admitted.admissionid,
        "discharged_admissionid": discharged.admissionid,
    }


@pytest.fixture
def session_factory():
    return TestingSessionLocal


@pytest.fixture
def failing_db():
    """Session whose commit writes, then fails like a dropped connection."""
    from sqlalchemy.exc import OperationalError

    session = TestingSessionLocal()

    def _commit():
        session.flush()
        raise OperationalError("COMMIT", {}, Exception("server has gone away"))

    session.commit = _commit
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def unreachable_db():
    """Session whose reads fail like a dropped connection."""
    from sqlalchemy.exc import OperationalError

    session = TestingSessionLocal()

    def _gone(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("server has gone away"))

    session.query = _gone
    session.get = _gone
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def offline_client(unreachable_db):
    """TestClient whose requests get the session from `unreachable_db`."""
    previous = app.dependency_overrides[get_db]
    app.dependency_overrides[get_db] = lambda: unreachable_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides[get_db] = previous
