"""
Shared plumbing for the repositories
"""

from contextlib import contextmanager
from typing import Generator
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pbi_access.core.exceptions import StoreError

logger = logging.getLogger(__name__)


class BaseRepository:
    """
    Wraps a request-scoped database session

    Every mutating statement is committed on its own; a failure
    part-way through a multi-statement operation leaves earlier
    statements committed.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _statement(self, action: str) -> Generator[None, None, None]:
        """Translate database errors into StoreError"""
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {action}: {e}")
            raise StoreError(f"failed to {action}: {e}") from e
