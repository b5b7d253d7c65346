"""
mappers/registry.py
-------------------
Builds the seven mappers wired to one another.

Each mapper owns its IdentityMap; the registry decides who shares what:
the restaurant mapper resolves through the city and type mappers, the
evaluation mappers through the restaurant mapper, the grade mapper through
the complete evaluation and criteria mappers. Two registries never share a
cache, so one registry is one identity scope.
"""

from typing import Any, Optional, Union

from db.sequence import SequenceAllocator
from mappers.base_mapper import BaseMapper
from mappers.basic_evaluation_mapper import BasicEvaluationMapper
from mappers.city_mapper import CityMapper
from mappers.complete_evaluation_mapper import CompleteEvaluationMapper
from mappers.evaluation_criteria_mapper import EvaluationCriteriaMapper
from mappers.grade_mapper import GradeMapper
from mappers.restaurant_mapper import RestaurantMapper
from mappers.restaurant_type_mapper import RestaurantTypeMapper
from models.evaluation import AnyEvaluation, CompleteEvaluation
from models.grade import Grade
from models.reference import Reference
from models.restaurant import Restaurant
from utils.logger import get_logger

logger = get_logger(__name__)


class MapperRegistry:
    """One mapper per entity type, sharing a single SequenceAllocator."""

    def __init__(self, allocator: Optional[SequenceAllocator] = None):
        allocator = allocator or SequenceAllocator()
        self.cities = CityMapper(allocator=allocator)
        self.restaurant_types = RestaurantTypeMapper(allocator=allocator)
        self.restaurants = RestaurantMapper(
            self.cities, self.restaurant_types, allocator=allocator
        )
        self.basic_evaluations = BasicEvaluationMapper(self.restaurants, allocator=allocator)
        self.complete_evaluations = CompleteEvaluationMapper(
            self.restaurants, allocator=allocator
        )
        self.criteria = EvaluationCriteriaMapper(allocator=allocator)
        self.grades = GradeMapper(
            self.complete_evaluations, self.criteria, allocator=allocator
        )
        self._by_type: dict[type, BaseMapper] = {
            mapper.entity_type: mapper for mapper in self.mappers()
        }

    def mappers(self) -> tuple[BaseMapper, ...]:
        return (
            self.cities,
            self.restaurant_types,
            self.restaurants,
            self.basic_evaluations,
            self.complete_evaluations,
            self.criteria,
            self.grades,
        )

    def mapper_for(self, entity_type: type) -> BaseMapper:
        """
        Raises:
            KeyError: If no mapper handles ``entity_type``.
        """
        return self._by_type[entity_type]

    def resolve(self, value: Any) -> Any:
        """Load the entity behind a Reference; anything else is returned as is."""
        if not isinstance(value, Reference):
            return value
        return self.mapper_for(value.entity_type).resolve(value)

    def load_evaluations(
        self, restaurant: Union[Restaurant, Reference[Restaurant]]
    ) -> set[AnyEvaluation]:
        """
        Fill ``restaurant.evaluations`` with its basic and complete evaluations.

        The restaurant mapper's cached instance is the one filled, even when
        the caller passes an older copy. Evaluations cached earlier with a
        Reference to this restaurant are pointed at it.

        Returns:
            The evaluations, or an empty set if the restaurant does not exist.

        Raises:
            TypeError: If ``restaurant`` references another entity type.
        """
        restaurant = self.restaurants.resolve(restaurant)
        if restaurant is None:
            return set()
        restaurant = self.restaurants.owner_for(restaurant.id, restaurant)
        evaluations: set[AnyEvaluation] = set()
        evaluations |= self.basic_evaluations.find_by_restaurant(restaurant)
        evaluations |= self.complete_evaluations.find_by_restaurant(restaurant)
        for evaluation in evaluations:
            if isinstance(evaluation.restaurant, Reference):
                evaluation.restaurant = restaurant
        restaurant.evaluations = evaluations
        return evaluations

    def load_grades(
        self, evaluation: Union[CompleteEvaluation, Reference[CompleteEvaluation]]
    ) -> set[Grade]:
        """
        Fill ``evaluation.grades`` from NOTES, the same way as ``load_evaluations``.

        Raises:
            TypeError: If ``evaluation`` is not a complete evaluation; basic
                evaluations carry no grades.
        """
        evaluation = self.complete_evaluations.resolve(evaluation)
        if evaluation is None:
            return set()
        if not isinstance(evaluation, CompleteEvaluation):
            raise TypeError(f"Only complete evaluations have grades, got {evaluation!r}")
        evaluation = self.complete_evaluations.owner_for(evaluation.id, evaluation)
        grades = self.grades.find_by_evaluation(evaluation)
        for grade in grades:
            if isinstance(grade.evaluation, Reference):
                grade.evaluation = evaluation
        evaluation.grades = grades
        return grades

    def reset(self) -> None:
        """Empty every identity map."""
        for mapper in self.mappers():
            mapper.identity_map.reset()
        logger.debug("All identity maps reset")
