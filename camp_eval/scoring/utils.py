"""
Decimal Utilities
camp_eval/scoring/utils.py

Precision-safe decimal helpers for score arithmetic.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable


def mean(values: Iterable[int], places: int = 1) -> Decimal:
    """
    Arithmetic mean, rounded half-up to `places` decimals.

    Raises ValueError on an empty input.
    """
    items = [Decimal(v) for v in values]
    if not items:
        raise ValueError("mean() requires at least one value")
    return (sum(items) / len(items)).quantize(
        Decimal(10) ** -places, rounding=ROUND_HALF_UP
    )
