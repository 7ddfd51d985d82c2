"""Integrity Hook errors.

Raised when the content-integrity validator blocks a mutation, or when
it returned warnings and the caller did not opt in to proceed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bandgov.domain.errors.governance import ErrorKind, GovernanceError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from bandgov.domain.models.integrity import IntegrityIssue


class IntegrityBlockedError(GovernanceError):
    """Raised when content did not clear the Integrity Hook.

    Attributes:
        issues: Every issue reported by the hook.
        can_override: True when only warnings were reported; the caller
            may retry with proceed_with_flags=True.
    """

    kind = ErrorKind.INTEGRITY_BLOCKED

    def __init__(
        self,
        issues: Sequence[IntegrityIssue],
        can_override: bool = False,
    ) -> None:
        """Initialize integrity blocked error.

        Args:
            issues: Issues reported by the Integrity Hook.
            can_override: Whether the caller may proceed with flags.
        """
        self.issues = tuple(issues)
        self.can_override = can_override
        if can_override:
            reason = (
                f"Content was flagged with {len(self.issues)} warning(s); "
                "confirm to proceed with flags"
            )
        else:
            reason = "Content contains prohibited material and cannot be posted"
        super().__init__(reason)

    def to_dict(self) -> dict[str, object]:  # type: ignore[override]
        """Return kind, reason and the reported issues."""
        return {
            "kind": self.kind.value,
            "reason": self.reason,
            "can_override": self.can_override,
            "issues": [issue.to_dict() for issue in self.issues],
        }
