"""
mappers/city_mapper.py
----------------------
Data mapper for cities (table VILLES).
"""

from mappers.base_mapper import BaseMapper
from models.city import City


class CityMapper(BaseMapper[City]):
    """Leaf mapper: a city has no outgoing foreign keys."""

    entity_type = City
    table = "villes"
    sequence = "seq_villes"
    columns = ("code_postal", "nom_ville")

    def _hydrate(self, row: tuple) -> City:
        return City(zip_code=row[1], city_name=row[2], id=row[0])

    def _values(self, city: City) -> tuple:
        return (city.zip_code, city.city_name)
