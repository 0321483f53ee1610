"""Record store boundary — every store failure leaves here as a TransportError."""
import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from menux.errors import TransportError

logger = logging.getLogger(__name__)


@contextmanager
def store_call(db: Session, operation: str):
    """Run a block of store statements; roll back and re-raise typed on failure.

    Errors that are already part of the taxonomy pass through untouched.
    Nothing is retried.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("Record store failure during %s: %s", operation, exc)
        raise TransportError(f"Record store unavailable during {operation}. Please retry.") from exc
