# hospital_billing/api/deps.py
from hospital_billing.db.session import get_db

__all__ = ["get_db"]
