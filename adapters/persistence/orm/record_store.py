import logging
from typing import Any, Hashable, List, Optional, Type, TypeVar

from sqlalchemy import event, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from domain.exceptions import UnexpectedStoreError
from domain.models.fetch_request import FetchRequest
from domain.ports.record_store import RecordStore

logger = logging.getLogger(__name__)

R = TypeVar("R")


class SqlAlchemyRecordStore(RecordStore):
    """
    RecordStore backed by a SQLAlchemy Session.

    The session is the pending-change scope: new records are added to it and
    stay pending until `commit`. Every fetch flushes first, so a record created
    earlier in the same session is visible to later lookups even when the
    session was built with autoflush disabled.

    Flushed but uncommitted writes still count as pending changes.
    """

    def __init__(self, session: Session):
        self.session = session
        self._flushed_writes = False
        event.listen(session, "after_flush", self._on_flush)
        event.listen(session, "after_commit", self._on_settled)
        event.listen(session, "after_rollback", self._on_settled)

    def _on_flush(self, session, flush_context):
        self._flushed_writes = True

    def _on_settled(self, session):
        self._flushed_writes = False

    def fetch(self, request: FetchRequest) -> List[Any]:
        column = getattr(request.record_type, request.attribute)
        stmt = select(request.record_type).where(column == request.value)
        if request.limit is not None:
            stmt = stmt.limit(request.limit)
        try:
            self.session.flush()
            result = self.session.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Fetch failed for {request.record_type.__name__}: {e}")
            raise UnexpectedStoreError(e) from e

    def new_record(self, record_type: Type[R]) -> R:
        record = record_type()
        self.session.add(record)
        return record

    def has_pending_changes(self) -> bool:
        if self.session.new or self.session.dirty or self.session.deleted:
            return True
        return self._flushed_writes and self.session.in_transaction()

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Commit failed, rolling back: {e}")
            self.session.rollback()
            raise UnexpectedStoreError(e) from e

    def rollback(self) -> None:
        self.session.rollback()

    def reference(self, record: Any) -> Hashable:
        # (class, primary key tuple, identity token); None until flushed
        return inspect(record).identity_key

    def resolve(self, reference: Hashable) -> Optional[Any]:
        if reference is None:
            return None
        record_type, primary_key, identity_token = reference
        try:
            return self.session.get(record_type, primary_key, identity_token=identity_token)
        except SQLAlchemyError as e:
            raise UnexpectedStoreError(e) from e
