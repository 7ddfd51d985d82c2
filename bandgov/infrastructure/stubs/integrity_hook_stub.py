"""Keyword-based Integrity Hook stub.

Blocks content containing any blocked term and flags content containing
any flagged term. Matching is case-insensitive over every string value
in the payload.

WARNING: This stub is for development/testing only.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any
from uuid import UUID

from bandgov.application.ports.integrity_hook import IntegrityHookProtocol
from bandgov.domain.models.integrity import (
    IntegrityAction,
    IntegrityCheckResult,
    IntegrityEntityType,
    IntegrityIssue,
    IssueSeverity,
    IssueType,
)


class IntegrityHookStub(IntegrityHookProtocol):
    """Integrity Hook that matches configured terms.

    Attributes:
        checks: Every (entity_type, action, band_id) checked, in order.
    """

    def __init__(
        self,
        blocked_terms: Iterable[str] = (),
        flagged_terms: Iterable[str] = (),
        issue_type: IssueType = IssueType.VALUES,
    ) -> None:
        self._blocked = tuple(term.lower() for term in blocked_terms)
        self._flagged = tuple(term.lower() for term in flagged_terms)
        self._issue_type = issue_type
        self.checks: list[tuple[IntegrityEntityType, IntegrityAction, UUID]] = []

    async def check(
        self,
        entity_type: IntegrityEntityType,
        action: IntegrityAction,
        band_id: UUID,
        data: dict[str, Any],
        parent_id: UUID | None = None,
    ) -> IntegrityCheckResult:
        self.checks.append((entity_type, action, band_id))
        text = " ".join(str(v) for v in data.values() if isinstance(v, str)).lower()

        issues: list[IntegrityIssue] = []
        for term in self._blocked:
            if term in text:
                issues.append(
                    IntegrityIssue(
                        type=self._issue_type,
                        severity=IssueSeverity.BLOCK,
                        message=f'Content contains blocked term "{term}"',
                    )
                )
        for term in self._flagged:
            if term in text:
                issues.append(
                    IntegrityIssue(
                        type=self._issue_type,
                        severity=IssueSeverity.FLAG,
                        message=f'Content contains flagged term "{term}"',
                    )
                )
        return IntegrityCheckResult(
            can_proceed=not any(issue.is_blocking for issue in issues),
            issues=tuple(issues),
        )
