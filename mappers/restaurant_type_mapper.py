"""
mappers/restaurant_type_mapper.py
---------------------------------
Data mapper for gastronomic types (table TYPES_GASTRONOMIQUES).
"""

from mappers.base_mapper import BaseMapper
from models.restaurant_type import RestaurantType


class RestaurantTypeMapper(BaseMapper[RestaurantType]):
    entity_type = RestaurantType
    table = "types_gastronomiques"
    sequence = "seq_types_gastronomiques"
    columns = ("libelle", "description")

    def _hydrate(self, row: tuple) -> RestaurantType:
        return RestaurantType(label=row[1], description=row[2], id=row[0])

    def _values(self, restaurant_type: RestaurantType) -> tuple:
        return (restaurant_type.label, restaurant_type.description)
