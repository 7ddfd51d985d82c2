"""In-memory port implementations for development and testing."""

from bandgov.infrastructure.stubs.audit_logger_stub import AuditLoggerStub
from bandgov.infrastructure.stubs.band_settings_stub import BandSettingsProviderStub
from bandgov.infrastructure.stubs.integrity_hook_stub import IntegrityHookStub
from bandgov.infrastructure.stubs.membership_oracle_stub import MembershipOracleStub
from bandgov.infrastructure.stubs.nomination_repository_stub import (
    NominationRepositoryStub,
)
from bandgov.infrastructure.stubs.notifier_stub import NotifierStub
from bandgov.infrastructure.stubs.proposal_repository_stub import (
    ProposalRepositoryStub,
)

__all__: list[str] = [
    "AuditLoggerStub",
    "BandSettingsProviderStub",
    "IntegrityHookStub",
    "MembershipOracleStub",
    "NominationRepositoryStub",
    "NotifierStub",
    "ProposalRepositoryStub",
]
