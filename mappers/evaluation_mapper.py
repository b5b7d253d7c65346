"""
mappers/evaluation_mapper.py
----------------------------
Behaviour shared by the two evaluation mappers (LIKES and COMMENTAIRES).

Both tables draw their ids from ``seq_eval`` and hold a ``fk_rest`` column.
The restaurant is never joined: it is the cached Restaurant when the
restaurant mapper already holds it, otherwise a Reference.
"""

from functools import partial
from typing import Optional, TypeVar, Union

from db.sequence import SequenceAllocator
from mappers.base_mapper import BaseMapper
from mappers.identity_map import IdentityMap
from mappers.restaurant_mapper import RestaurantMapper
from models.reference import Reference, is_loaded
from models.restaurant import Restaurant

E = TypeVar("E")


class EvaluationMapper(BaseMapper[E]):
    sequence = "seq_eval"

    def __init__(
        self,
        restaurants: RestaurantMapper,
        identity_map: Optional[IdentityMap[E]] = None,
        allocator: Optional[SequenceAllocator] = None,
    ) -> None:
        super().__init__(identity_map, allocator)
        self.restaurants = restaurants

    def _restaurant_for(
        self, restaurant_id: int, restaurant: Optional[Restaurant] = None
    ) -> Union[Restaurant, Reference[Restaurant]]:
        return self.restaurants.owner_for(restaurant_id, restaurant)

    def find_by_restaurant(
        self, restaurant: Union[Restaurant, Reference[Restaurant]]
    ) -> set[E]:
        """
        All evaluations of this kind for one restaurant.

        Newly hydrated evaluations point at the restaurant mapper's cached
        instance, or at ``restaurant`` itself when that mapper holds none;
        evaluations already cached are returned as they are.
        """
        restaurant_id = self._foreign_key(restaurant, "Restaurant")
        owner = restaurant if is_loaded(restaurant) else None
        return self._find_where(
            "fk_rest", restaurant_id, partial(self._hydrate, restaurant=owner)
        )
