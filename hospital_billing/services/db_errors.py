# hospital_billing/services/db_errors.py
from __future__ import annotations

import logging

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hospital_billing.core.config import settings

logger = logging.getLogger(__name__)


def driver_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc)


def db_failure(db: Session, exc: SQLAlchemyError, action: str) -> HTTPException:
    """
    Roll back the request transaction and build the 500 to raise.
    Usage: `raise db_failure(db, e, "updating billing") from e`
    """
    db.rollback()
    logger.exception("Database failure while %s", action)
    if settings.EXPOSE_DB_ERRORS:
        return HTTPException(status_code=500,
                             detail=f"Error {action}: {driver_message(exc)}")
    return HTTPException(status_code=500, detail=f"Error {action}")
