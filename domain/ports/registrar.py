import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, Optional, Type, TypeVar

from domain.exceptions import RecordAlreadyExistsError, RecordNotFoundError
from domain.models.fetch_request import FetchRequest
from domain.ports.record import IdentifiableRecord, set_identifier
from domain.ports.record_store import RecordStore

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=IdentifiableRecord)


class EntityRegistrar(ABC, Generic[R]):
    """
    Lookup and creation of one record, keyed by its identifier.

    A registrar ensures that records are uniquely identifiable and carry
    their non-negotiable metadata (creation timestamps and the like). It does
    not manage any other attribute.

    Subclasses declare `record_type` and implement `apply_initial_metadata`;
    every other operation is inherited:

        class ChatRegistrar(EntityRegistrar[Chat]):
            record_type = Chat

            def apply_initial_metadata(self, record: Chat) -> None:
                record.created_at = datetime.now(timezone.utc)

        chat = ChatRegistrar(chat_id, store).query_or_insert(save=True)

    The identifier and store are fixed at construction. Registrars are cheap
    and request-scoped; build a new one per lookup.

    `insert` and `query_or_insert` query first and create second. That pair
    is not atomic across stores bound to different sessions: two of them can
    both miss and both create. Put a unique constraint on the identifier
    column (the losing commit then raises `UnexpectedStoreError`) or
    serialize callers externally.
    """

    record_type: ClassVar[Type[Any]]

    def __init__(self, identifier: Any, store: RecordStore):
        self._identifier = identifier
        self._store = store

    @property
    def identifier(self) -> Any:
        return self._identifier

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def fetch_request(self) -> FetchRequest:
        """Single-row request matching this registrar's identifier."""
        return FetchRequest.by_identifier(self.record_type, self._identifier)

    @abstractmethod
    def apply_initial_metadata(self, record: R) -> None:
        """
        Stamp required fields on a newly created record.

        Called once, on the creation path only. Never use it to modify an
        existing record.
        """

    def load(self) -> Optional[R]:
        """The record if it exists, otherwise None."""
        records = self._store.fetch(self.fetch_request)
        logger.debug(
            "Registrar lookup type=%s identifier=%s hit=%s",
            self.record_type.__name__,
            self._identifier,
            bool(records),
        )
        return records[0] if records else None

    def exists(self) -> bool:
        return self.load() is not None

    def query(self) -> R:
        """
        Fetch the record for this identifier.

        Raises:
            RecordNotFoundError: nothing matches the identifier.
            UnexpectedStoreError: the store failed.
        """
        record = self.load()
        if record is None:
            raise RecordNotFoundError(self.record_type, self._identifier)
        return record

    def insert(self, save: bool = False) -> R:
        """
        Create the record, refusing to touch an existing one.

        Args:
            save: commit the store right after creation.

        Raises:
            RecordAlreadyExistsError: a record with this identifier exists;
                the error carries the store reference to it.
            UnexpectedStoreError: the store failed during fetch or commit.
        """
        try:
            record = self.query()
        except RecordNotFoundError:
            return self._create(save)

        raise RecordAlreadyExistsError(
            self._store.reference(record),
            record_type=self.record_type,
            identifier=self._identifier,
        )

    def query_or_insert(self, save: bool = False) -> R:
        """
        Return the existing record, or create it if missing.

        An existing record is returned untouched; the metadata hook only runs
        when a record is created.
        """
        try:
            return self.query()
        except RecordNotFoundError:
            return self._create(save)

    def _create(self, save: bool) -> R:
        record = self._store.new_record(self.record_type)
        set_identifier(record, self._identifier)
        self.apply_initial_metadata(record)
        if save:
            self._store.commit()
        logger.info(
            "Registrar created type=%s identifier=%s saved=%s",
            self.record_type.__name__,
            self._identifier,
            save,
        )
        return record

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._identifier == other._identifier and self._store is other._store

    def __hash__(self) -> int:
        return hash((type(self), self._identifier, id(self._store)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(identifier={self._identifier!r})"
