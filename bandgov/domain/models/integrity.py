"""Integrity Hook result model.

The Integrity Hook is an external content validator consulted before a
content-bearing mutation commits. It answers with can_proceed plus a
list of issues. can_proceed is False only when a BLOCK issue exists;
FLAG issues are warnings the author may explicitly override.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class IntegrityEntityType(Enum):
    """Entity kinds the Integrity Hook can inspect."""

    PROPOSAL = "Proposal"
    PROJECT = "Project"
    TASK = "Task"
    CHECKLIST_ITEM = "ChecklistItem"


class IntegrityAction(Enum):
    """Mutation being validated."""

    CREATE = "create"
    UPDATE = "update"


class IssueType(Enum):
    """What an integrity issue is about."""

    LEGALITY = "legality"
    VALUES = "values"
    SCOPE = "scope"


class IssueSeverity(Enum):
    """BLOCK refuses the mutation; FLAG allows it with explicit override."""

    BLOCK = "block"
    FLAG = "flag"


@dataclass(frozen=True, eq=True)
class IntegrityIssue:
    """One issue reported by the Integrity Hook."""

    type: IssueType
    severity: IssueSeverity
    message: str

    @property
    def is_blocking(self) -> bool:
        return self.severity == IssueSeverity.BLOCK

    def to_dict(self) -> dict[str, str]:
        return {
            "type": self.type.value,
            "severity": self.severity.value,
            "message": self.message,
        }


@dataclass(frozen=True, eq=True)
class IntegrityCheckResult:
    """Answer from the Integrity Hook.

    Attributes:
        can_proceed: False if any BLOCK issue exists.
        issues: All issues found, blocking or not.
    """

    can_proceed: bool
    issues: tuple[IntegrityIssue, ...] = field(default=())

    @classmethod
    def clear(cls) -> IntegrityCheckResult:
        """A result with no issues."""
        return cls(can_proceed=True, issues=())

    @property
    def has_warnings(self) -> bool:
        """True when the content may proceed but carries issues."""
        return self.can_proceed and len(self.issues) > 0
