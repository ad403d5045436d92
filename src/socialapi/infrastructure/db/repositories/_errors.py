from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from socialapi.application.exceptions import ConflictError, PersistenceError

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Re-raise SQLAlchemy failures as application persistence errors."""
    try:
        yield
    except IntegrityError as exc:
        logger.warning("%s rejected by constraint: %s", operation, exc.orig)
        raise ConflictError(f"{operation}: constraint violation") from exc
    except SQLAlchemyError as exc:
        logger.error("%s failed: %s", operation, exc)
        raise PersistenceError(f"{operation} failed") from exc
