# camp_eval/scoring/composite.py
"""
Composite Score Combiner
------------------------
Combines two independently recorded ratings for the same corps member.

Formula:
    composite = (total_A + total_B) / 2   rounded half-up to one decimal

Defined only when both ratings are complete. A missing or incomplete side
gives CompositeScore.unavailable(), a normal value rather than an error,
since the two raters submit in any order.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Protocol

import structlog

from camp_eval.scoring.utils import mean

logger = structlog.get_logger(__name__)

NOT_AVAILABLE_LABEL = "Not yet available"


class RatedTotal(Protocol):
    """Anything exposing a total and a completion flag (RatingRecord, RatingSheet)."""
    total_score: int
    is_complete: bool


@dataclass(frozen=True)
class CompositeScore:
    """Composite of two rating totals; score is None when unavailable."""
    score: Optional[Decimal]

    @classmethod
    def unavailable(cls) -> "CompositeScore":
        return cls(score=None)

    @property
    def available(self) -> bool:
        return self.score is not None

    @property
    def label(self) -> str:
        return str(self.score) if self.score is not None else NOT_AVAILABLE_LABEL


def combine(rating_a: Optional[RatedTotal], rating_b: Optional[RatedTotal]) -> CompositeScore:
    """
    Average two rating totals when both are complete.

    Args:
        rating_a: First rating, or None when not yet submitted.
        rating_b: Second rating, or None when not yet submitted.

    Returns:
        CompositeScore. Symmetric in its arguments; neither input is modified.

    Raises:
        ValueError: both ratings carry a corps member id and the ids differ.

    Examples:
        >>> combine(pi_record_30, mow_record_41).score
        Decimal('35.5')
    """
    if not _is_complete(rating_a) or not _is_complete(rating_b):
        return CompositeScore.unavailable()

    member_a = getattr(rating_a, "corp_member_id", None)
    member_b = getattr(rating_b, "corp_member_id", None)
    if member_a is not None and member_b is not None and member_a != member_b:
        raise ValueError("Cannot combine ratings of different corps members")

    score = mean([rating_a.total_score, rating_b.total_score], places=1)

    logger.debug(
        "composite_computed",
        corp_member_id=str(member_a or member_b) if (member_a or member_b) else None,
        total_a=rating_a.total_score,
        total_b=rating_b.total_score,
        composite=float(score),
    )
    return CompositeScore(score=score)


def _is_complete(rating: Optional[RatedTotal]) -> bool:
    return rating is not None and bool(rating.is_complete)
