"""
models/restaurant_type.py
-------------------------
Domain model for gastronomic types (table TYPES_GASTRONOMIQUES).
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(eq=False)
class RestaurantType:
    """A kind of cuisine, e.g. 'Pizzeria'."""
    label: str
    description: Optional[str] = None
    id: Optional[int] = None

    def __str__(self) -> str:
        return self.label
