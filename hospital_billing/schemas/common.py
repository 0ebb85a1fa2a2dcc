# FILE: hospital_billing/schemas/common.py
from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class OperationIn(BaseModel):
    """Base for operation payloads; the `operation` key and unknown keys are ignored."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class DateRangeQuery(OperationIn):
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        # filter dropdowns send "" for "All"
        if isinstance(v, str) and not v.strip():
            return None
        return v
