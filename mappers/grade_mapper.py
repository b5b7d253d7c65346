"""
mappers/grade_mapper.py
-----------------------
Data mapper for grades (table NOTES).

A grade's evaluation and criterion are never joined. Each becomes the
instance cached by its own mapper if there is one, otherwise a Reference
that the caller resolves on demand.
"""

from functools import partial
from typing import Optional, Union

from db.sequence import SequenceAllocator
from mappers.base_mapper import BaseMapper
from mappers.complete_evaluation_mapper import CompleteEvaluationMapper
from mappers.evaluation_criteria_mapper import EvaluationCriteriaMapper
from mappers.identity_map import IdentityMap
from models.evaluation import CompleteEvaluation
from models.evaluation_criteria import EvaluationCriteria
from models.grade import Grade
from models.reference import Reference, is_loaded


class GradeMapper(BaseMapper[Grade]):
    entity_type = Grade
    table = "notes"
    sequence = "seq_notes"
    columns = ("note", "fk_comm", "fk_crit")

    def __init__(
        self,
        evaluations: CompleteEvaluationMapper,
        criteria: EvaluationCriteriaMapper,
        identity_map: Optional[IdentityMap[Grade]] = None,
        allocator: Optional[SequenceAllocator] = None,
    ) -> None:
        super().__init__(identity_map, allocator)
        self.evaluations = evaluations
        self.criteria = criteria

    def _hydrate(
        self,
        row: tuple,
        evaluation: Optional[CompleteEvaluation] = None,
        criteria: Optional[EvaluationCriteria] = None,
    ) -> Grade:
        return Grade(
            score=row[1],
            evaluation=self.evaluations.owner_for(row[2], evaluation),
            criteria=self.criteria.owner_for(row[3], criteria),
            id=row[0],
        )

    def _values(self, grade: Grade) -> tuple:
        return (
            grade.score,
            self._foreign_key(grade.evaluation, "CompleteEvaluation"),
            self._foreign_key(grade.criteria, "EvaluationCriteria"),
        )

    # ── FINDERS ───────────────────────────────────────────

    def find_by_evaluation(
        self, evaluation: Union[CompleteEvaluation, Reference[CompleteEvaluation]]
    ) -> set[Grade]:
        """
        All grades of one complete evaluation.

        Args:
            evaluation: The evaluation (loaded or referenced). Newly
                hydrated grades point at the instance the evaluation mapper
                caches, or at this one when that mapper holds none.
        """
        evaluation_id = self._foreign_key(evaluation, "CompleteEvaluation")
        owner = evaluation if is_loaded(evaluation) else None
        return self._find_where(
            "fk_comm", evaluation_id, partial(self._hydrate, evaluation=owner)
        )

    def find_by_criteria(
        self, criteria: Union[EvaluationCriteria, Reference[EvaluationCriteria]]
    ) -> set[Grade]:
        """All grades given for one criterion."""
        criteria_id = self._foreign_key(criteria, "EvaluationCriteria")
        owner = criteria if is_loaded(criteria) else None
        return self._find_where(
            "fk_crit", criteria_id, partial(self._hydrate, criteria=owner)
        )
