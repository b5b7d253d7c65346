"""
models/evaluation_criteria.py
-----------------------------
Domain model for evaluation criteria (table CRITERES_EVALUATION).
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(eq=False)
class EvaluationCriteria:
    """A dimension a complete evaluation grades, e.g. 'Service'."""
    name: str
    description: Optional[str] = None
    id: Optional[int] = None
