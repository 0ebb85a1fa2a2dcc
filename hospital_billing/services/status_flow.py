# hospital_billing/services/status_flow.py
from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, FrozenSet, Optional, Type, TypeVar

from fastapi import HTTPException

from hospital_billing.models.billing import BillingStatus
from hospital_billing.models.lab import LabRequestStatus
from hospital_billing.models.prescription import PrescriptionStatus

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

PRESCRIPTION_FLOW: Dict[PrescriptionStatus, FrozenSet[PrescriptionStatus]] = {
    PrescriptionStatus.PENDING: frozenset({
        PrescriptionStatus.DISPENSED,
        PrescriptionStatus.CANCELLED,
        PrescriptionStatus.EXPIRED,
    }),
    PrescriptionStatus.DISPENSED: frozenset(),
    PrescriptionStatus.CANCELLED: frozenset(),
    PrescriptionStatus.EXPIRED: frozenset(),
}

LAB_REQUEST_FLOW: Dict[LabRequestStatus, FrozenSet[LabRequestStatus]] = {
    LabRequestStatus.PENDING: frozenset({
        LabRequestStatus.IN_PROGRESS,
        LabRequestStatus.CANCELLED,
    }),
    LabRequestStatus.IN_PROGRESS: frozenset({
        LabRequestStatus.COMPLETED,
        LabRequestStatus.CANCELLED,
    }),
    LabRequestStatus.COMPLETED: frozenset(),
    LabRequestStatus.CANCELLED: frozenset(),
}

BILLING_FLOW: Dict[BillingStatus, FrozenSet[BillingStatus]] = {
    BillingStatus.PENDING: frozenset({
        BillingStatus.PARTIAL,
        BillingStatus.PAID,
        BillingStatus.CANCELLED,
    }),
    BillingStatus.PARTIAL: frozenset({
        BillingStatus.PAID,
        BillingStatus.CANCELLED,
    }),
    BillingStatus.PAID: frozenset(),
    BillingStatus.CANCELLED: frozenset(),
}


def parse_status(enum_cls: Type[E], raw) -> Optional[E]:
    """Case-insensitive lookup by value ("in progress" -> IN_PROGRESS)."""
    if raw is None:
        return None
    if isinstance(raw, enum_cls):
        return raw
    s = str(raw).strip().lower()
    for member in enum_cls:
        if member.value.lower() == s:
            return member
    return None


def can_transition(flow: Dict[E, FrozenSet[E]], current: E, target: E) -> bool:
    if current == target:
        return True
    return target in flow.get(current, frozenset())


def ensure_transition(flow: Dict[E, FrozenSet[E]], current, target, *, label: str) -> E:
    """
    Validate `current -> target` against `flow` and return the target member.
    Raises 422 for unknown statuses and illegal moves.
    """
    enum_cls = type(next(iter(flow)))
    cur = parse_status(enum_cls, current)
    tgt = parse_status(enum_cls, target)
    if tgt is None:
        raise HTTPException(status_code=422, detail=f"Invalid {label} status: {target}")
    if cur is None:
        # legacy rows with unknown status: accept any valid target
        return tgt
    if not can_transition(flow, cur, tgt):
        logger.warning("Rejected %s status change %s -> %s", label, cur.value, tgt.value)
        raise HTTPException(
            status_code=422,
            detail=f"Cannot change {label} status from {cur.value} to {tgt.value}",
        )
    return tgt
