"""
Shared endpoint helpers
"""
import logging
from typing import Optional
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


def parse_uuid(value: Optional[str], field: str) -> Optional[UUID]:
    """Parse an id taken from a request body"""
    if value in (None, ""):
        return None
    try:
        return UUID(str(value))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid {field}"
        )


def commit_or_conflict(db: Session, conflict_detail: str) -> None:
    """Commit, turning a constraint violation into 409"""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error("Integrity error: %s", e.orig)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=conflict_detail
        )


def flush_or_conflict(db: Session, conflict_detail: str) -> None:
    """Flush pending rows, turning a constraint violation into 409"""
    try:
        db.flush()
    except IntegrityError as e:
        db.rollback()
        logger.error("Integrity error: %s", e.orig)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=conflict_detail
        )
