"""Tally Engine: counts votes and decides pass or fail.

Rule selection by proposal type:
- DISSOLUTION: passes only if at least one vote was cast and no vote
  is NO. Non-voters are ignored and quorum does not apply.
- Every other type: quorum first, then at least one decisive (YES or
  NO) vote, then the pass rule registered for the Band's voting method.
  Abstentions count toward quorum but not toward the percentages.

Pass rules live in a TallyRuleRegistry built once at start-up and
passed to the engine. Threshold comparisons are done on integers so
that 2 of 3 is exactly "at least 66%".
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from bandgov.domain.models.band_settings import VotingMethod
from bandgov.domain.models.proposal import ProposalType
from bandgov.domain.models.tally import TallyResult
from bandgov.domain.models.vote import Vote, VoteChoice

PassRule = Callable[[int, int], bool]
"""A pass rule takes (yes, no) with yes + no > 0."""


@dataclass(frozen=True)
class ThresholdRule:
    """YES share must exceed (or reach, if inclusive) ``percent``."""

    percent: int
    inclusive: bool

    def __call__(self, yes: int, no: int) -> bool:
        scaled_yes = yes * 100
        scaled_threshold = self.percent * (yes + no)
        if self.inclusive:
            return scaled_yes >= scaled_threshold
        return scaled_yes > scaled_threshold


def unanimous_rule(yes: int, no: int) -> bool:
    """No NO votes and at least one YES."""
    return no == 0 and yes > 0


class TallyRuleRegistry:
    """Pass rules keyed by voting method."""

    def __init__(self) -> None:
        self._rules: dict[VotingMethod, PassRule] = {}

    def register(self, method: VotingMethod, rule: PassRule) -> None:
        self._rules[method] = rule

    def rule_for(self, method: VotingMethod) -> PassRule:
        """Return the rule for ``method``.

        Raises:
            LookupError: If nothing is registered for the method.
        """
        try:
            return self._rules[method]
        except KeyError:
            raise LookupError(f"No tally rule registered for {method.value}") from None

    @property
    def methods(self) -> frozenset[VotingMethod]:
        return frozenset(self._rules)

    @classmethod
    def default(cls) -> TallyRuleRegistry:
        """Registry with the four standard voting methods."""
        registry = cls()
        registry.register(
            VotingMethod.SIMPLE_MAJORITY, ThresholdRule(percent=50, inclusive=False)
        )
        registry.register(
            VotingMethod.SUPERMAJORITY_66, ThresholdRule(percent=66, inclusive=True)
        )
        registry.register(
            VotingMethod.SUPERMAJORITY_75, ThresholdRule(percent=75, inclusive=True)
        )
        registry.register(VotingMethod.UNANIMOUS, unanimous_rule)
        return registry


def _percentage(part: int, whole: int) -> float:
    if whole == 0:
        return 0.0
    return round(part / whole * 100, 2)


class TallyEngine:
    """Computes a TallyResult from a proposal's votes."""

    def __init__(self, registry: TallyRuleRegistry) -> None:
        self._registry = registry

    def compute_verdict(
        self,
        proposal_type: ProposalType,
        votes: Iterable[Vote],
        eligible_voter_count: int,
        voting_method: VotingMethod,
        quorum_percentage: int,
    ) -> TallyResult:
        """Count votes and decide the verdict.

        Args:
            proposal_type: Selects the dissolution rule or the method rule.
            votes: Current vote rows for the proposal.
            eligible_voter_count: Active members holding a voting role.
            voting_method: The Band's voting method.
            quorum_percentage: Minimum participation (0-100).

        Returns:
            TallyResult with counts, percentages and the verdict.
        """
        yes = no = abstain = 0
        for vote in votes:
            if vote.choice == VoteChoice.YES:
                yes += 1
            elif vote.choice == VoteChoice.NO:
                no += 1
            else:
                abstain += 1
        total = yes + no + abstain
        decisive = yes + no
        participation = _percentage(total, eligible_voter_count)

        if proposal_type == ProposalType.DISSOLUTION:
            passed, reason = self._dissolution_verdict(yes, no, total)
            quorum_required = 0
            quorum_met = True
        else:
            quorum_required = quorum_percentage
            quorum_met = total * 100 >= quorum_percentage * eligible_voter_count
            if quorum_percentage > 0 and eligible_voter_count == 0:
                quorum_met = False
            if not quorum_met:
                passed = False
                reason = (
                    f"Quorum not met: {total} of {eligible_voter_count} eligible "
                    f"voters participated ({participation:.0f}%), needed "
                    f"{quorum_percentage}%"
                )
            elif decisive == 0:
                passed = False
                reason = "No YES or NO votes were cast"
            else:
                passed = self._registry.rule_for(voting_method)(yes, no)
                reason = (
                    None
                    if passed
                    else f"Did not meet the {voting_method.value} threshold"
                )

        return TallyResult(
            yes=yes,
            no=no,
            abstain=abstain,
            total=total,
            eligible_voters=eligible_voter_count,
            percentage_yes=_percentage(yes, decisive),
            percentage_no=_percentage(no, decisive),
            participation_percentage=participation,
            quorum_required=quorum_required,
            quorum_met=quorum_met,
            passed=passed,
            reason=reason,
        )

    @staticmethod
    def _dissolution_verdict(yes: int, no: int, total: int) -> tuple[bool, str | None]:
        if total == 0:
            return False, "No votes were cast on the dissolution proposal"
        if no > 0:
            return False, (
                f"Dissolution requires unanimous approval; {no} member(s) voted NO"
            )
        return True, None
