"""
models/reference.py
-------------------
Tagged stand-in for a row that has not been loaded.

A foreign-key attribute holds either a loaded entity or a ``Reference``.
A reference only knows the target type and id; call the owning mapper's
``resolve()`` to turn it into the loaded entity before reading other fields.
"""

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Reference(Generic[T]):
    """
    Attributes:
        entity_type: The class the id belongs to (e.g. ``City``).
        id: Primary key of the referenced row.
    """
    entity_type: type
    id: int

    def __repr__(self) -> str:
        return f"Reference({self.entity_type.__name__}#{self.id})"


def is_loaded(value: Any) -> bool:
    """Returns True if ``value`` is a loaded entity rather than a Reference."""
    return value is not None and not isinstance(value, Reference)


def ref_id(value: Any) -> Optional[int]:
    """Id of either a loaded entity or a Reference (None if unset)."""
    if value is None:
        return None
    return value.id
