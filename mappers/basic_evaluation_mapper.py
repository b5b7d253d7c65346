"""
mappers/basic_evaluation_mapper.py
----------------------------------
Data mapper for like/dislike evaluations (table LIKES).
The appreciation is stored as a single character: 'T' (like) or 'F' (dislike).
"""

from typing import Optional

from mappers.evaluation_mapper import EvaluationMapper
from models.evaluation import BasicEvaluation
from models.restaurant import Restaurant


def encode_appreciation(like_restaurant: bool) -> str:
    return "T" if like_restaurant else "F"


def decode_appreciation(value: Optional[str]) -> bool:
    return (value or "").strip().upper() == "T"


class BasicEvaluationMapper(EvaluationMapper[BasicEvaluation]):
    entity_type = BasicEvaluation
    table = "likes"
    columns = ("appreciation", "date_eval", "adresse_ip", "fk_rest")

    def _hydrate(self, row: tuple, restaurant: Optional[Restaurant] = None) -> BasicEvaluation:
        return BasicEvaluation(
            like_restaurant=decode_appreciation(row[1]),
            visit_date=row[2],
            ip_address=row[3],
            restaurant=self._restaurant_for(row[4], restaurant),
            id=row[0],
        )

    def _values(self, evaluation: BasicEvaluation) -> tuple:
        return (
            encode_appreciation(evaluation.like_restaurant),
            evaluation.visit_date,
            evaluation.ip_address,
            self._foreign_key(evaluation.restaurant, "Restaurant"),
        )
