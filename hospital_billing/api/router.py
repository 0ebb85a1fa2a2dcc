# hospital_billing/api/router.py
from fastapi import APIRouter
from hospital_billing.api import (
    routes_billing,
    routes_payments,
    routes_prescriptions,
    routes_lab_requests,
)

api_router = APIRouter()
api_router.include_router(routes_billing.router)
api_router.include_router(routes_payments.router)
api_router.include_router(routes_prescriptions.router)
api_router.include_router(routes_lab_requests.router)
