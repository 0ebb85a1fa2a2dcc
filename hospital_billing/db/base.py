# hospital_billing/db/base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """All billing tables (patients, admissions, billing, payments, etc.) inherit from this."""
    pass
