"""
mappers/restaurant_mapper.py
----------------------------
Data mapper for restaurants (table RESTAURANTS).

Reads join VILLES and TYPES_GASTRONOMIQUES in the same statement, so listing
restaurants with their city and type costs one query. The joined city and
type are handed to their own mappers' caches (``adopt``): an instance those
mappers already hold is reused, otherwise the one built from the joined
columns becomes the cached instance. A miss is deliberately not sent
through ``find_by_id``: the join already read the row, and the identity
outcome is the same.
"""

from typing import Optional

from db.sequence import SequenceAllocator
from mappers.base_mapper import BaseMapper
from mappers.city_mapper import CityMapper
from mappers.identity_map import IdentityMap
from mappers.restaurant_type_mapper import RestaurantTypeMapper
from models.city import City
from models.restaurant import Localisation, Restaurant
from models.restaurant_type import RestaurantType


class RestaurantMapper(BaseMapper[Restaurant]):
    """Maps RESTAURANTS rows, resolving city and type through their mappers."""

    entity_type = Restaurant
    table = "restaurants"
    sequence = "seq_restaurants"
    columns = ("nom", "adresse", "description", "site_web", "fk_type", "fk_vill")

    def __init__(
        self,
        cities: CityMapper,
        restaurant_types: RestaurantTypeMapper,
        identity_map: Optional[IdentityMap[Restaurant]] = None,
        allocator: Optional[SequenceAllocator] = None,
    ) -> None:
        super().__init__(identity_map, allocator)
        self.cities = cities
        self.restaurant_types = restaurant_types

    def _select_sql(self) -> str:
        return """
            SELECT r.numero, r.nom, r.adresse, r.description, r.site_web,
                   v.numero, v.code_postal, v.nom_ville,
                   t.numero, t.libelle, t.description
            FROM   restaurants r
            JOIN   villes v ON v.numero = r.fk_vill
            JOIN   types_gastronomiques t ON t.numero = r.fk_type
        """

    def _id_filter(self) -> str:
        return "r.numero"

    def _hydrate(self, row: tuple) -> Restaurant:
        city_id, type_id = row[5], row[8]
        city = self.cities.adopt(
            city_id, lambda: City(zip_code=row[6], city_name=row[7], id=city_id)
        )
        restaurant_type = self.restaurant_types.adopt(
            type_id, lambda: RestaurantType(label=row[9], description=row[10], id=type_id)
        )
        return Restaurant(
            name=row[1],
            address=Localisation(street=row[2], city=city),
            restaurant_type=restaurant_type,
            description=row[3],
            website=row[4],
            id=row[0],
        )

    def _values(self, restaurant: Restaurant) -> tuple:
        return (
            restaurant.name,
            restaurant.address.street,
            restaurant.description,
            restaurant.website,
            self._foreign_key(restaurant.restaurant_type, "RestaurantType"),
            self._foreign_key(restaurant.address.city, "City"),
        )
