"""Driver eligibility rules.

Eligibility is never stored. It is derived on every check from four
independent predicates evaluated against the caller-supplied time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .driver import Driver

BACKGROUND_CHECK_WINDOW_S = 31_536_000  # 365 days
MIN_ELIGIBLE_SAFETY_SCORE = 70


@dataclass(frozen=True, slots=True)
class EligibilityReport:
    """Outcome of each eligibility predicate for one driver at one instant."""

    license_valid: bool
    background_check_valid: bool
    safety_score_acceptable: bool
    is_active: bool

    @property
    def eligible(self) -> bool:
        """True only when every predicate holds."""
        return (
            self.license_valid
            and self.background_check_valid
            and self.safety_score_acceptable
            and self.is_active
        )

    def failed_checks(self) -> list[str]:
        """Names of the predicates that did not hold."""
        return [
            name
            for name in (
                "license_valid",
                "background_check_valid",
                "safety_score_acceptable",
                "is_active",
            )
            if not getattr(self, name)
        ]


def evaluate_eligibility(driver: Driver, current_time: int) -> EligibilityReport:
    """Evaluate every eligibility predicate for ``driver`` at ``current_time``.

    An expiry equal to ``current_time`` is already expired, and a background
    check exactly one window old is no longer valid.
    """
    return EligibilityReport(
        license_valid=driver.license_expiry > current_time,
        background_check_valid=(
            current_time - driver.last_background_check < BACKGROUND_CHECK_WINDOW_S
        ),
        safety_score_acceptable=driver.safety_score >= MIN_ELIGIBLE_SAFETY_SCORE,
        is_active=driver.active,
    )
