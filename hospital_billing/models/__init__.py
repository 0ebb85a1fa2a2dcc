# hospital_billing/models/__init__.py
from .patient import Patient
from .masters import Doctor, Medicine, LabTestCategory, LabTest, ServiceCategory
from .ipd import Admission, AdmissionStatus
from .billing import Billing, BillingStatus, Payment, PaymentMethod
from .prescription import Prescription, PrescriptionStatus
from .lab import LabRequest, LabRequestStatus

__all__ = [
    "Patient",
    "Doctor",
    "Medicine",
    "LabTestCategory",
    "LabTest",
    "ServiceCategory",
    "Admission",
    "AdmissionStatus",
    "Billing",
    "BillingStatus",
    "Payment",
    "PaymentMethod",
    "Prescription",
    "PrescriptionStatus",
    "LabRequest",
    "LabRequestStatus",
]
