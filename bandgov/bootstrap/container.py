"""Bootstrap wiring for the governance engine.

build_governance_container() assembles every service once, over either
caller-supplied adapters or the in-memory stubs, and returns them in a
GovernanceContainer. Services receive their collaborators through
constructors; nothing is looked up globally after this point.
"""

from __future__ import annotations

from dataclasses import dataclass

from structlog import get_logger

from bandgov.application.ports.audit_logger import AuditLoggerProtocol
from bandgov.application.ports.band_settings import BandSettingsProviderProtocol
from bandgov.application.ports.content_hash_service import ContentHashServiceProtocol
from bandgov.application.ports.integrity_hook import IntegrityHookProtocol
from bandgov.application.ports.membership_oracle import MembershipOracleProtocol
from bandgov.application.ports.nomination_repository import (
    NominationRepositoryProtocol,
)
from bandgov.application.ports.notifier import NotifierProtocol
from bandgov.application.ports.proposal_repository import ProposalRepositoryProtocol
from bandgov.application.ports.time_authority import TimeAuthorityProtocol
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
from bandgov.config.governance_config import GovernanceConfig
from bandgov.domain.governance.tally import TallyEngine, TallyRuleRegistry
from bandgov.infrastructure.adapters.structlog_audit_logger import (
    StructlogAuditLogger,
)
from bandgov.infrastructure.adapters.system_time_authority import SystemTimeAuthority
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

logger = get_logger()


@dataclass(frozen=True)
class GovernanceContainer:
    """Every wired service and the adapters behind them."""

    config: GovernanceConfig
    lifecycle: ProposalLifecycleService
    votes: VoteLedgerService
    edits: ProposalEditService
    nominations: FounderNominationService
    proposal_repository: ProposalRepositoryProtocol
    nomination_repository: NominationRepositoryProtocol
    membership_oracle: MembershipOracleProtocol
    settings_provider: BandSettingsProviderProtocol
    integrity_hook: IntegrityHookProtocol
    notifier: NotifierProtocol
    audit_logger: AuditLoggerProtocol
    time_authority: TimeAuthorityProtocol
    tally_registry: TallyRuleRegistry


def build_governance_container(
    config: GovernanceConfig | None = None,
    *,
    proposal_repository: ProposalRepositoryProtocol | None = None,
    nomination_repository: NominationRepositoryProtocol | None = None,
    membership_oracle: MembershipOracleProtocol | None = None,
    settings_provider: BandSettingsProviderProtocol | None = None,
    integrity_hook: IntegrityHookProtocol | None = None,
    notifier: NotifierProtocol | None = None,
    audit_logger: AuditLoggerProtocol | None = None,
    time_authority: TimeAuthorityProtocol | None = None,
    tally_registry: TallyRuleRegistry | None = None,
    hash_service: ContentHashServiceProtocol | None = None,
) -> GovernanceContainer:
    """Wire the governance services.

    Any adapter left as None is replaced by its in-memory stub (or, for
    the clock and audit sink, by the production adapter).

    Args:
        config: Engine defaults; read from the environment when None.

    Returns:
        The assembled GovernanceContainer.
    """
    if config is None:
        config = GovernanceConfig.from_environment()

    stubbed = [
        name
        for name, adapter in (
            ("proposal_repository", proposal_repository),
            ("nomination_repository", nomination_repository),
            ("membership_oracle", membership_oracle),
            ("settings_provider", settings_provider),
            ("integrity_hook", integrity_hook),
            ("notifier", notifier),
        )
        if adapter is None
    ]
    if stubbed:
        logger.warning(
            "governance_using_stubs",
            stubbed=stubbed,
            message="In-memory stubs are for development/testing only",
        )

    hash_service = hash_service or Blake3ContentHashService()
    proposal_repository = proposal_repository or ProposalRepositoryStub()
    nomination_repository = nomination_repository or NominationRepositoryStub()
    membership_oracle = membership_oracle or MembershipOracleStub()
    settings_provider = settings_provider or BandSettingsProviderStub(config)
    integrity_hook = integrity_hook or IntegrityHookStub()
    notifier = notifier or NotifierStub()
    audit_logger = audit_logger or StructlogAuditLogger(hash_service)
    time_authority = time_authority or SystemTimeAuthority()
    tally_registry = tally_registry or TallyRuleRegistry.default()

    lookup = GovernanceLookup(proposal_repository, membership_oracle, settings_provider)
    integrity_gate = IntegrityGate(integrity_hook)
    tally_engine = TallyEngine(tally_registry)
    side_effects = SideEffectDispatcher(notifier, audit_logger)

    container = GovernanceContainer(
        config=config,
        lifecycle=ProposalLifecycleService(
            repository=proposal_repository,
            lookup=lookup,
            integrity_gate=integrity_gate,
            tally_engine=tally_engine,
            side_effects=side_effects,
            time_authority=time_authority,
            hash_service=hash_service,
        ),
        votes=VoteLedgerService(
            repository=proposal_repository,
            lookup=lookup,
            tally_engine=tally_engine,
            side_effects=side_effects,
            time_authority=time_authority,
        ),
        edits=ProposalEditService(
            repository=proposal_repository,
            lookup=lookup,
            integrity_gate=integrity_gate,
            hash_service=hash_service,
            side_effects=side_effects,
            time_authority=time_authority,
        ),
        nominations=FounderNominationService(
            repository=nomination_repository,
            membership_oracle=membership_oracle,
            side_effects=side_effects,
            time_authority=time_authority,
        ),
        proposal_repository=proposal_repository,
        nomination_repository=nomination_repository,
        membership_oracle=membership_oracle,
        settings_provider=settings_provider,
        integrity_hook=integrity_hook,
        notifier=notifier,
        audit_logger=audit_logger,
        time_authority=time_authority,
        tally_registry=tally_registry,
    )
    logger.info(
        "governance_container_built",
        environment=config.environment,
        voting_methods=sorted(m.value for m in tally_registry.methods),
    )
    return container
