from typing import Any, Hashable, Optional


class RegistrarError(Exception):
    """
    Base class for every failure raised by a registrar or a record store.
    """


class RecordNotFoundError(RegistrarError):
    """No record matches the requested identifier."""

    def __init__(self, record_type: Optional[type] = None, identifier: Any = None):
        self.record_type = record_type
        self.identifier = identifier
        name = record_type.__name__ if record_type is not None else "record"
        super().__init__(f"No {name} with identifier {identifier!r} could be found.")


class RecordAlreadyExistsError(RegistrarError):
    """
    Creation collided with an existing identifier.

    `reference` is the store's handle for the pre-existing row, so the caller
    can resolve the conflict without querying again.
    """

    def __init__(self, reference: Hashable, record_type: Optional[type] = None, identifier: Any = None):
        self.reference = reference
        self.record_type = record_type
        self.identifier = identifier
        name = record_type.__name__ if record_type is not None else "record"
        super().__init__(f"A {name} with identifier {identifier!r} already exists.")


class UnexpectedStoreError(RegistrarError):
    """Opaque failure coming from the store layer (I/O, constraint violation...)."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"An unexpected store error occurred: {cause}")
