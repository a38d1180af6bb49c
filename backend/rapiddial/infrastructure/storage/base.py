"""
SQL Repository Base
Runs blocking SQLAlchemy work off the event loop with a deadline
"""
import asyncio
import logging
from typing import Any, Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from rapiddial.core.exceptions import StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SqlRepository:
    """
    Base for repositories backed by a SQLAlchemy session factory.

    Each call runs in a worker thread and is bounded by timeout_seconds.
    Driver errors and timeouts surface as StorageError; a timed-out thread
    finishes in the background and its transaction commits or rolls back
    on its own.
    """

    def __init__(self, session_factory: sessionmaker, timeout_seconds: float = 5.0):
        self._session_factory = session_factory
        self._timeout = timeout_seconds

    async def _run(self, operation: str, fn: Callable[..., T], *args: Any) -> T:
        try:
            return await asyncio.wait_for(asyncio.to_thread(fn, *args), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"{type(self).__name__}.{operation} timed out after {self._timeout}s", exc_info=True)
            raise StorageError(f"{operation} timed out after {self._timeout}s") from e
        except SQLAlchemyError as e:
            logger.error(f"{type(self).__name__}.{operation} failed: {e}", exc_info=True)
            raise StorageError(f"{operation} failed: {e}") from e
