"""Translation of driver errors into domain exceptions."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from pymongo.errors import DuplicateKeyError, PyMongoError

from taskboard.domain.exceptions import InvalidArgumentError, StoreFailureError

log = logging.getLogger(__name__)


@contextmanager
def translate_store_errors(collection: str, operation: str) -> Iterator[None]:
    """Re-raise pymongo errors as InvalidArgumentError / StoreFailureError."""
    try:
        yield
    except DuplicateKeyError as e:
        key = (e.details or {}).get("keyValue") if isinstance(e.details, dict) else None
        raise InvalidArgumentError(f"Duplicate value in {collection}", details=key) from e
    except PyMongoError as e:
        log.error(f"Store failure during {operation} on '{collection}': {e}")
        raise StoreFailureError(f"Failed to {operation} {collection}", str(e)) from e
