"""State transition errors for the proposal and nomination state machines.

A transition that is not in the transition matrix is rejected with
InvalidStateTransitionError. Operations that require a particular
status (voting needs OPEN, closing needs OPEN, ...) raise
InvalidStateError directly.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from bandgov.domain.errors.governance import ErrorKind, GovernanceError

if TYPE_CHECKING:
    from collections.abc import Iterable


class InvalidStateError(GovernanceError):
    """Raised when an operation is not legal from the current status."""

    kind = ErrorKind.INVALID_STATE


class InvalidStateTransitionError(InvalidStateError):
    """Raised when a transition is not in the transition matrix.

    Attributes:
        from_state: Current state.
        to_state: Attempted target state.
        allowed_transitions: Valid target states from the current state.
    """

    def __init__(
        self,
        from_state: Enum,
        to_state: Enum,
        allowed_transitions: Iterable[Enum] | None = None,
    ) -> None:
        """Initialize invalid state transition error.

        Args:
            from_state: Current state.
            to_state: Attempted invalid target state.
            allowed_transitions: Valid states from the current state (optional).
        """
        self.from_state = from_state
        self.to_state = to_state
        self.allowed_transitions = sorted(
            allowed_transitions or [], key=lambda s: str(s.value)
        )

        allowed_str = (
            f" Valid transitions: {[s.value for s in self.allowed_transitions]}"
            if self.allowed_transitions
            else ""
        )
        super().__init__(
            f"Invalid state transition: {from_state.value} -> {to_state.value}.{allowed_str}"
        )
