"""
models/grade.py
---------------
Domain model for grades (table NOTES).
"""

from dataclasses import dataclass
from typing import Optional, Union

from models.evaluation import CompleteEvaluation
from models.evaluation_criteria import EvaluationCriteria
from models.reference import Reference


@dataclass(eq=False)
class Grade:
    """
    Score given to one criterion inside a complete evaluation.

    Attributes:
        score: Integer score.
        evaluation: The CompleteEvaluation, loaded or referenced.
        criteria: The EvaluationCriteria, loaded or referenced.
        id: Database primary key (None for new records).
    """
    score: int
    evaluation: Union[CompleteEvaluation, Reference[CompleteEvaluation]]
    criteria: Union[EvaluationCriteria, Reference[EvaluationCriteria]]
    id: Optional[int] = None
