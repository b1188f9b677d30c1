"""Translation of driver failures into domain errors."""

from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from sqlalchemy.exc import SQLAlchemyError

from core.exceptions import StoreUnavailableError

logger = structlog.get_logger()


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Re-raise database and connection failures as StoreUnavailableError."""
    try:
        yield
    except (SQLAlchemyError, OSError) as exc:
        logger.error(
            "store_operation_failed",
            operation=operation,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        raise StoreUnavailableError(operation) from exc
