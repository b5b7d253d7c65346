"""
models/evaluation.py
--------------------
Domain models for restaurant evaluations.

An evaluation is one of two variants stored in separate tables:
    - BasicEvaluation (LIKES): a like/dislike with the visitor's IP.
    - CompleteEvaluation (COMMENTAIRES): a comment plus one grade per criterion.
Both variants share the visit date, the restaurant and the id space
(sequence ``seq_eval``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Optional, Union

from models.reference import Reference
from models.restaurant import Restaurant

if TYPE_CHECKING:
    from models.grade import Grade


@dataclass(eq=False, kw_only=True)
class Evaluation:
    """Fields common to both evaluation variants."""
    restaurant: Union[Restaurant, Reference[Restaurant]]
    visit_date: date = field(default_factory=date.today)
    id: Optional[int] = None


@dataclass(eq=False, kw_only=True)
class BasicEvaluation(Evaluation):
    """
    Attributes:
        like_restaurant: True for a like, False for a dislike.
        ip_address: Origin of the vote (anti-abuse is the caller's job).
    """
    like_restaurant: bool
    ip_address: str


@dataclass(eq=False, kw_only=True)
class CompleteEvaluation(Evaluation):
    """
    Attributes:
        comment: Free text review.
        username: Author's name.
        grades: In-memory set of Grade objects for this evaluation.
    """
    comment: str
    username: str
    grades: set[Grade] = field(default_factory=set, repr=False)


AnyEvaluation = Union[BasicEvaluation, CompleteEvaluation]
