from recordkit.models.base import Base, CreatedAtMixin, IdentifiableMixin

# Export all
__all__ = [
    "Base",
    "CreatedAtMixin",
    "IdentifiableMixin",
]
