from typing import Any, Hashable, List, Optional, Protocol, Type, TypeVar

from domain.models.fetch_request import FetchRequest

R = TypeVar("R")


class RecordStore(Protocol):
    """
    Persistence Port: the store a registrar talks to.
    Decouples the registrar protocol from the ORM session it runs on.

    Store-layer failures are raised as `UnexpectedStoreError`.
    """

    def fetch(self, request: FetchRequest) -> List[Any]:
        """Records matching `request`, at most `request.limit` of them."""
        ...

    def new_record(self, record_type: Type[R]) -> R:
        """Instantiate `record_type` inside the pending-change scope."""
        ...

    def has_pending_changes(self) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...

    def reference(self, record: Any) -> Hashable:
        """Stable handle naming the persisted row behind `record`."""
        ...

    def resolve(self, reference: Hashable) -> Optional[Any]:
        """Record for a handle returned by `reference`, or None if it is gone."""
        ...
