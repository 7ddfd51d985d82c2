"""Application-layer DTOs."""

from bandgov.application.dtos.governance import (
    CloseResult,
    EditResult,
    ElapsedSweepResult,
    NominationAck,
    VoteAck,
)

__all__: list[str] = [
    "CloseResult",
    "EditResult",
    "ElapsedSweepResult",
    "NominationAck",
    "VoteAck",
]
