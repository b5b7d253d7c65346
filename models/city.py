"""
models/city.py
--------------
Domain model for cities (table VILLES).
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(eq=False)
class City:
    """
    A city a restaurant can be located in.

    Attributes:
        zip_code: Postal code (kept as text, e.g. '2000').
        city_name: Display name (e.g. 'Neuchâtel').
        id: Database primary key (None for new records).
    """
    zip_code: str
    city_name: str
    id: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.zip_code} {self.city_name}"
