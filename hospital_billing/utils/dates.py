# FILE: hospital_billing/utils/dates.py
from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional


def utcnow_naive() -> datetime:
    """Naive UTC timestamp; DateTime columns are stored without tzinfo."""
    return datetime.utcnow()


def day_start(d: Optional[date]) -> Optional[datetime]:
    if d is None:
        return None
    if isinstance(d, datetime):
        return d
    return datetime.combine(d, time.min)


def day_end(d: Optional[date]) -> Optional[datetime]:
    """Inclusive upper bound: a "to" date covers the whole day."""
    if d is None:
        return None
    if isinstance(d, datetime):
        return d
    return datetime.combine(d, time.max)
