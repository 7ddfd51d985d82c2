"""Domain errors for bandgov.

All governance errors inherit from GovernanceError and carry an
ErrorKind plus a human-readable reason.
"""

from bandgov.domain.errors.concurrent_modification import ConcurrencyConflictError
from bandgov.domain.errors.governance import ErrorKind, GovernanceError
from bandgov.domain.errors.integrity import IntegrityBlockedError
from bandgov.domain.errors.limit import LimitExceededError
from bandgov.domain.errors.not_found import (
    BandNotFoundError,
    MembershipNotFoundError,
    NominationNotFoundError,
    NotFoundError,
    ProposalNotFoundError,
)
from bandgov.domain.errors.permission import PermissionDeniedError
from bandgov.domain.errors.state_transition import (
    InvalidStateError,
    InvalidStateTransitionError,
)
from bandgov.domain.errors.validation import ValidationError

__all__: list[str] = [
    "BandNotFoundError",
    "ConcurrencyConflictError",
    "ErrorKind",
    "GovernanceError",
    "IntegrityBlockedError",
    "InvalidStateError",
    "InvalidStateTransitionError",
    "LimitExceededError",
    "MembershipNotFoundError",
    "NominationNotFoundError",
    "NotFoundError",
    "PermissionDeniedError",
    "ProposalNotFoundError",
    "ValidationError",
]
