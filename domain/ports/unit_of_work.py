from typing import Protocol

from domain.ports.record_store import RecordStore


class UnitOfWork(Protocol):
    """
    Unit of Work Interface.
    Owns a record store for the duration of a block and commits its pending
    changes on success, rolls them back on failure.
    """

    store: RecordStore

    def __enter__(self) -> "UnitOfWork": ...

    def __exit__(self, exc_type, exc_value, traceback) -> None: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
