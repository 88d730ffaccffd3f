# =============================================================================================
# APP/STORES/COMMON.PY - SHARED STORE HELPERS
# =============================================================================================
# Maps SQLAlchemy failures to the domain errors in app/core/errors.py so nothing above the
# store layer has to know which database is underneath.
# =============================================================================================

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, StoreUnavailableError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@contextmanager
def translate_errors(session: Session, conflict_message: str = "Record already exists") -> Iterator[None]:
    """
    Run a store operation, rolling back and re-raising database failures as domain errors.

    - IntegrityError (unique/foreign key violation) → ConflictError
    - Any other SQLAlchemyError (lost connection, lock timeout, ...) → StoreUnavailableError

    No retry happens here; the failure is surfaced to the caller immediately.
    """
    try:
        yield
    except IntegrityError as exc:
        session.rollback()
        raise ConflictError(conflict_message) from exc
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Database operation failed: {}", exc.__class__.__name__)
        raise StoreUnavailableError() from exc
