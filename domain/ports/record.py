from typing import Any, ClassVar, Protocol, runtime_checkable

DEFAULT_IDENTIFIER_ATTRIBUTE = "identifier"


@runtime_checkable
class IdentifiableRecord(Protocol):
    """
    A persisted entity named by a unique, caller-assigned identifier.

    The identifier lives under `identifier_attribute_name` in the backing
    schema. It is assigned once, at creation, and never changed afterwards.
    """

    identifier_attribute_name: ClassVar[str]


def identifier_attribute_name(record_type: type) -> str:
    """Attribute holding the identifier for `record_type` ("identifier" unless overridden)."""
    return getattr(record_type, "identifier_attribute_name", DEFAULT_IDENTIFIER_ATTRIBUTE)


def get_identifier(record: Any) -> Any:
    return getattr(record, identifier_attribute_name(type(record)))


def set_identifier(record: Any, value: Any) -> None:
    setattr(record, identifier_attribute_name(type(record)), value)
