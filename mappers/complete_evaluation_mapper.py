"""
mappers/complete_evaluation_mapper.py
-------------------------------------
Data mapper for commented evaluations (table COMMENTAIRES).
Grades are not loaded here; see ``GradeMapper.find_by_evaluation``.
"""

from typing import Optional

from mappers.evaluation_mapper import EvaluationMapper
from models.evaluation import CompleteEvaluation
from models.restaurant import Restaurant


class CompleteEvaluationMapper(EvaluationMapper[CompleteEvaluation]):
    entity_type = CompleteEvaluation
    table = "commentaires"
    columns = ("date_eval", "commentaire", "nom_utilisateur", "fk_rest")

    def _hydrate(self, row: tuple, restaurant: Optional[Restaurant] = None) -> CompleteEvaluation:
        return CompleteEvaluation(
            visit_date=row[1],
            comment=row[2],
            username=row[3],
            restaurant=self._restaurant_for(row[4], restaurant),
            id=row[0],
        )

    def _values(self, evaluation: CompleteEvaluation) -> tuple:
        return (
            evaluation.visit_date,
            evaluation.comment,
            evaluation.username,
            self._foreign_key(evaluation.restaurant, "Restaurant"),
        )
