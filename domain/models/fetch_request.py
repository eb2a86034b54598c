from dataclasses import dataclass
from typing import Any, Optional

from domain.ports.record import identifier_attribute_name


@dataclass(frozen=True)
class FetchRequest:
    """
    "attribute == value" against one record type, optionally row-limited.

    This is the only predicate shape the stores understand.
    """

    record_type: type
    attribute: str
    value: Any
    limit: Optional[int] = None

    def __post_init__(self):
        if self.limit is not None and self.limit < 1:
            raise ValueError(f"limit must be positive, got {self.limit}")

    @classmethod
    def by_identifier(cls, record_type: type, identifier: Any) -> "FetchRequest":
        """Single-row lookup by primary key."""
        return cls(
            record_type=record_type,
            attribute=identifier_attribute_name(record_type),
            value=identifier,
            limit=1,
        )
