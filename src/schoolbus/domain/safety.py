"""Safety scoring rules.

Penalties are looked up from an ordered list of ``(min_severity, penalty)``
tiers. Tiers are evaluated from the lowest threshold to the highest and the
last satisfied tier wins, so adding a tier only needs a new entry here.
"""

from typing import NamedTuple


class PenaltyTier(NamedTuple):
    """Deduction applied when an incident's severity reaches ``min_severity``."""

    min_severity: int
    penalty: int


DEFAULT_SAFETY_SCORE = 100
MIN_SAFETY_SCORE = 0

DEFAULT_PENALTY = 5

# ascending by min_severity
PENALTY_TIERS: tuple[PenaltyTier, ...] = (
    PenaltyTier(min_severity=5, penalty=15),
    PenaltyTier(min_severity=8, penalty=30),
)


def penalty_for(
    severity: int, tiers: tuple[PenaltyTier, ...] = PENALTY_TIERS
) -> int:
    """Return the score deduction for an incident of the given severity.

    Args:
        severity: Incident severity. Nominally 1..10 but not validated; values
            below the first tier get the default penalty and values above the
            last tier get the last tier's penalty.
        tiers: Ordered penalty tiers, lowest threshold first.

    Returns:
        The number of points to deduct.
    """
    penalty = DEFAULT_PENALTY
    for tier in tiers:
        if severity >= tier.min_severity:
            penalty = tier.penalty
    return penalty


def apply_penalty(score: int, penalty: int) -> int:
    """Deduct ``penalty`` from ``score``, clamping at zero."""
    return max(MIN_SAFETY_SCORE, score - penalty)
