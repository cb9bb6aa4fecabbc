"""
Prefix guard.

Ensures the exclusion list for a draw is scored only from strictly
earlier draws. Any draw at or after the target is blocked and recorded.
"""

from dataclasses import dataclass
from typing import Any, Sequence

from lotto_exclusion.data.models import Draw


@dataclass
class PrefixViolation:
    """Record of draws that were blocked from a scoring prefix."""

    purpose: str
    target_draw_no: int
    draws_blocked: int


class PrefixGuard:
    """
    Filters scoring history down to draws strictly before a target draw.

    Usage:
        guard = PrefixGuard()

        previous = guard.validate("replay", history[:i], target_draw_no=draw.draw_no)
        exclusion_list = score_exclusions(previous)

        # After the replay, check for violations
        report = guard.report()
    """

    def __init__(self):
        self.violations: list[PrefixViolation] = []
        self._call_count = 0

    def validate(
        self,
        purpose: str,
        history: Sequence[Draw],
        target_draw_no: int,
    ) -> tuple:
        """
        Keep only draws with draw_no < target_draw_no.

        Args:
            purpose: What the prefix is used for (for the report)
            history: Candidate scoring history
            target_draw_no: Draw being evaluated (exclusive)

        Returns:
            Tuple of earlier draws, original order preserved
        """
        self._call_count += 1

        safe = tuple(d for d in history if d.draw_no < target_draw_no)
        blocked = len(history) - len(safe)

        if blocked > 0:
            self.violations.append(
                PrefixViolation(
                    purpose=purpose,
                    target_draw_no=int(target_draw_no),
                    draws_blocked=blocked,
                )
            )

        return safe

    def report(self) -> dict[str, Any]:
        """
        Generate guard report.

        Returns:
            Dict with validation status and details
        """
        if not self.violations:
            return {
                "status": "CLEAN",
                "message": "No later draws reached a scoring prefix",
                "total_calls": self._call_count,
                "violations_blocked": 0,
                "details": [],
            }

        total_blocked = sum(v.draws_blocked for v in self.violations)

        return {
            "status": "VIOLATIONS_BLOCKED",
            "message": f"Blocked {total_blocked} draws across {len(self.violations)} prefixes",
            "total_calls": self._call_count,
            "violations_blocked": len(self.violations),
            "total_draws_blocked": total_blocked,
            "details": [
                {
                    "purpose": v.purpose,
                    "target": v.target_draw_no,
                    "blocked": v.draws_blocked,
                }
                for v in self.violations[:10]
            ],
        }

    def reset(self) -> None:
        """Reset guard state."""
        self.violations = []
        self._call_count = 0

    @property
    def is_clean(self) -> bool:
        """True if no draws were blocked."""
        return len(self.violations) == 0
