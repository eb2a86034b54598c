from typing import ClassVar

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base

from domain.ports.record import DEFAULT_IDENTIFIER_ATTRIBUTE

Base = declarative_base()


class IdentifiableMixin:
    """
    Marks a mapped class as an identifiable record.

    Override `identifier_attribute_name` when the identifier column is not
    called "identifier".
    """

    identifier_attribute_name: ClassVar[str] = DEFAULT_IDENTIFIER_ATTRIBUTE


class CreatedAtMixin:
    # Stamped by a registrar's apply_initial_metadata, never updated
    created_at = Column(DateTime(timezone=True), nullable=True)
