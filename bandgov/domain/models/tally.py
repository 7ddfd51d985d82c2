"""Tally result model.

A TallyResult is the read-only outcome of counting a proposal's votes.
The Lifecycle Controller maps ``passed`` to APPROVED or REJECTED and
stores the snapshot on the proposal when it closes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, eq=True)
class TallyResult:
    """Vote counts and verdict for a proposal.

    Attributes:
        yes: YES votes.
        no: NO votes.
        abstain: ABSTAIN votes.
        total: All votes cast (yes + no + abstain).
        eligible_voters: Members eligible to vote when tallied.
        percentage_yes: yes / (yes + no) * 100; abstentions excluded.
        percentage_no: no / (yes + no) * 100; abstentions excluded.
        participation_percentage: total / eligible_voters * 100.
        quorum_required: Quorum percentage that applied (0 when the rule
            ignores quorum).
        quorum_met: Whether participation reached the quorum.
        passed: The verdict.
        reason: Why the proposal failed, None when it passed.
    """

    yes: int
    no: int
    abstain: int
    total: int
    eligible_voters: int
    percentage_yes: float
    percentage_no: float
    participation_percentage: float
    quorum_required: int
    quorum_met: bool
    passed: bool
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for audit payloads."""
        return {
            "yes": self.yes,
            "no": self.no,
            "abstain": self.abstain,
            "total": self.total,
            "eligible_voters": self.eligible_voters,
            "percentage_yes": self.percentage_yes,
            "percentage_no": self.percentage_no,
            "participation_percentage": self.participation_percentage,
            "quorum_required": self.quorum_required,
            "quorum_met": self.quorum_met,
            "passed": self.passed,
            "reason": self.reason,
        }
