"""Application ports: the collaborators governance services depend on."""

from bandgov.application.ports.audit_logger import AuditLoggerProtocol
from bandgov.application.ports.band_settings import BandSettingsProviderProtocol
from bandgov.application.ports.content_hash_service import (
    ContentHashServiceProtocol,
)
from bandgov.application.ports.integrity_hook import IntegrityHookProtocol
from bandgov.application.ports.membership_oracle import MembershipOracleProtocol
from bandgov.application.ports.nomination_repository import (
    NominationRepositoryProtocol,
)
from bandgov.application.ports.notifier import NotifierProtocol
from bandgov.application.ports.proposal_repository import (
    CloseResolver,
    ProposalRepositoryProtocol,
)
from bandgov.application.ports.time_authority import TimeAuthorityProtocol

__all__: list[str] = [
    "AuditLoggerProtocol",
    "BandSettingsProviderProtocol",
    "CloseResolver",
    "ContentHashServiceProtocol",
    "IntegrityHookProtocol",
    "MembershipOracleProtocol",
    "NominationRepositoryProtocol",
    "NotifierProtocol",
    "ProposalRepositoryProtocol",
    "TimeAuthorityProtocol",
]
