"""
models/restaurant.py
--------------------
Domain model for restaurants (table RESTAURANTS) and their embedded address.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Union

from models.city import City
from models.reference import Reference
from models.restaurant_type import RestaurantType

if TYPE_CHECKING:
    from models.evaluation import AnyEvaluation


@dataclass
class Localisation:
    """
    Street address embedded in a restaurant row (columns ADRESSE, FK_VILL).

    Attributes:
        street: Street and number.
        city: The loaded City or a Reference to it.
    """
    street: str
    city: Union[City, Reference[City]]


@dataclass(eq=False)
class Restaurant:
    """
    Represents a restaurant listed in the guide.

    Attributes:
        name: Restaurant name.
        address: Embedded street + city.
        restaurant_type: Gastronomic type, loaded or referenced.
        description: Optional free text.
        website: Optional URL.
        evaluations: In-memory set of evaluations; not a column, the
            evaluation rows hold the foreign key back to the restaurant.
        id: Database primary key (None for new records).
    """
    name: str
    address: Localisation
    restaurant_type: Union[RestaurantType, Reference[RestaurantType]]
    description: Optional[str] = None
    website: Optional[str] = None
    evaluations: set[AnyEvaluation] = field(default_factory=set, repr=False)
    id: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.name} ({self.address.street})"
