import logging
from datetime import datetime, timezone
from typing import Any, Callable, Generic, List, Optional, Type, TypeVar

from domain.models.fetch_request import FetchRequest
from domain.models.query_result import ExecutedNoMatch, Failed, Found, NotYetExecuted, QueryResult
from domain.ports.record_store import RecordStore
from domain.ports.registrar import EntityRegistrar

logger = logging.getLogger(__name__)

R = TypeVar("R")

ResultListener = Callable[[QueryResult], None]


class DatabaseQuery(Generic[R]):
    """
    Re-executable fetch with an observable `result`.

    `result` starts as NotYetExecuted and is replaced on every `perform`.
    Listeners registered through `subscribe` are called with each new result.
    Nothing guards against overlapping `perform` calls; the last one wins.
    """

    def __init__(self, fetch_request: FetchRequest, store: RecordStore):
        self.fetch_request = fetch_request
        self.store = store
        self._result: QueryResult = NotYetExecuted()
        self._listeners: List[ResultListener] = []

    @property
    def result(self) -> QueryResult:
        return self._result

    @result.setter
    def result(self, value: QueryResult) -> None:
        self._result = value
        for listener in list(self._listeners):
            listener(value)

    def subscribe(self, listener: ResultListener) -> Callable[[], None]:
        """Register `listener`; call the returned function to unregister it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def perform(self, timestamp: Optional[datetime] = None) -> QueryResult:
        """Execute the fetch and update `result`."""
        timestamp = timestamp or datetime.now(timezone.utc)
        try:
            records = self.store.fetch(self.fetch_request)
        except Exception as e:
            logger.warning(f"Query on {self.fetch_request.record_type.__name__} failed: {e}")
            self.result = Failed(error=e)
            return self.result

        if records:
            self.result = Found(records=records)
        else:
            self.result = ExecutedNoMatch(timestamp=timestamp)
        return self.result


class PrimaryKeyQuery(DatabaseQuery[R]):
    """A query for a single record, located by its identifier."""

    def __init__(self, registrar_type: Type[EntityRegistrar[R]], identifier: Any, store: RecordStore):
        registrar = registrar_type(identifier, store)
        self.identifier = identifier
        super().__init__(registrar.fetch_request, store)
