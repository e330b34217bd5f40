"""
Decimal Utilities
app/scoring/utils.py

Precision-safe percentage math for questionnaire scoring.
"""

from decimal import Decimal, ROUND_HALF_UP


def clamp(
    value: Decimal,
    min_val: Decimal = Decimal("0"),
    max_val: Decimal = Decimal("100"),
) -> Decimal:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves away from zero (62.5 -> 63)."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percentage(score: int, max_score: int) -> int:
    """
    Integer percentage of score over max_score.

    Formula: round_half_up(score / max_score × 100), clamped to [0, 100].
    Returns 0 when max_score is zero.
    """
    if max_score <= 0:
        return 0
    raw = Decimal(score) * Decimal(100) / Decimal(max_score)
    return round_half_up(clamp(raw))
