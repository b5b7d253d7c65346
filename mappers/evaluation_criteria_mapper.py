"""
mappers/evaluation_criteria_mapper.py
-------------------------------------
Data mapper for evaluation criteria (table CRITERES_EVALUATION).
"""

from mappers.base_mapper import BaseMapper
from models.evaluation_criteria import EvaluationCriteria


class EvaluationCriteriaMapper(BaseMapper[EvaluationCriteria]):
    entity_type = EvaluationCriteria
    table = "criteres_evaluation"
    sequence = "seq_criteres_evaluation"
    columns = ("nom", "description")

    def _hydrate(self, row: tuple) -> EvaluationCriteria:
        return EvaluationCriteria(name=row[1], description=row[2], id=row[0])

    def _values(self, criteria: EvaluationCriteria) -> tuple:
        return (criteria.name, criteria.description)
