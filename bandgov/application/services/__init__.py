"""Governance application services."""

from bandgov.application.services.base import LoggingMixin
from bandgov.application.services.content_hash_service import (
    Blake3ContentHashService,
)
from bandgov.application.services.founder_nomination_service import (
    FounderNominationService,
)
from bandgov.application.services.governance_lookup import GovernanceLookup
from bandgov.application.services.integrity_gate import IntegrityGate
from bandgov.application.services.proposal_edit_service import ProposalEditService
from bandgov.application.services.proposal_lifecycle_service import (
    ProposalLifecycleService,
)
from bandgov.application.services.side_effects import SideEffectDispatcher
from bandgov.application.services.vote_ledger_service import VoteLedgerService

__all__: list[str] = [
    "Blake3ContentHashService",
    "FounderNominationService",
    "GovernanceLookup",
    "IntegrityGate",
    "LoggingMixin",
    "ProposalEditService",
    "ProposalLifecycleService",
    "SideEffectDispatcher",
    "VoteLedgerService",
]
