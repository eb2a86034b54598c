import logging
import uuid
from typing import Optional

from sqlalchemy.orm import Session

from adapters.persistence.orm.record_store import SqlAlchemyRecordStore
from domain.ports.unit_of_work import UnitOfWork
from recordkit.core.context import reset_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    Opens a session, exposes it as a record store and settles it on exit.

    Logs emitted inside the block carry the unit of work's correlation id.
    """

    def __init__(self, session_factory):
        self.session_factory = session_factory
        self.session: Optional[Session] = None
        self.store: Optional[SqlAlchemyRecordStore] = None
        self._token = None

    def __enter__(self):
        self.session = self.session_factory()
        self.store = SqlAlchemyRecordStore(self.session)
        self._token = set_correlation_id(uuid.uuid4().hex)
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        try:
            if exc_type:
                self.rollback()
            else:
                self.commit()
        finally:
            self.session.close()
            reset_correlation_id(self._token)

    def commit(self):
        # Nothing staged means nothing to write
        if not self.store.has_pending_changes():
            logger.debug("Unit of work has no pending changes, skipping commit")
            return
        self.store.commit()

    def rollback(self):
        self.store.rollback()
