"""Shared reads used by every governance service.

Turns "not there" answers from the ports into NotFound errors and
builds PermissionContexts from memberships.
"""

from __future__ import annotations

from collections.abc import Collection
from uuid import UUID

from bandgov.application.ports.band_settings import BandSettingsProviderProtocol
from bandgov.application.ports.membership_oracle import MembershipOracleProtocol
from bandgov.application.ports.proposal_repository import ProposalRepositoryProtocol
from bandgov.domain.errors.not_found import BandNotFoundError, ProposalNotFoundError
from bandgov.domain.governance.permissions import PermissionContext
from bandgov.domain.models.band_settings import BandGovernanceSettings
from bandgov.domain.models.membership import MemberRole
from bandgov.domain.models.proposal import Proposal


class GovernanceLookup:
    """Reads proposals, settings and memberships for services."""

    def __init__(
        self,
        repository: ProposalRepositoryProtocol,
        membership_oracle: MembershipOracleProtocol,
        settings_provider: BandSettingsProviderProtocol,
    ) -> None:
        self._repository = repository
        self._membership_oracle = membership_oracle
        self._settings_provider = settings_provider

    async def proposal(self, proposal_id: UUID) -> Proposal:
        """Load a proposal.

        Raises:
            ProposalNotFoundError: If it does not exist.
        """
        proposal = await self._repository.get(proposal_id)
        if proposal is None:
            raise ProposalNotFoundError(proposal_id)
        return proposal

    async def settings(self, band_id: UUID) -> BandGovernanceSettings:
        """Load a band's governance settings.

        Raises:
            BandNotFoundError: If the band is unknown.
        """
        settings = await self._settings_provider.get_settings(band_id)
        if settings is None:
            raise BandNotFoundError(band_id)
        return settings

    async def context(
        self,
        band_id: UUID,
        actor_id: UUID,
        proposal: Proposal | None = None,
        include_author_role: bool = False,
    ) -> PermissionContext:
        """Build the actor's PermissionContext.

        Args:
            band_id: The band.
            actor_id: The acting user.
            proposal: The proposal acted on, for authorship.
            include_author_role: Also look up the author's role (review).
        """
        membership = await self._membership_oracle.get_membership(band_id, actor_id)
        author_id = proposal.created_by_id if proposal is not None else None
        author_role: MemberRole | None = None
        if include_author_role and author_id is not None:
            author_membership = await self._membership_oracle.get_membership(
                band_id, author_id
            )
            if author_membership is not None:
                author_role = author_membership.role
        return PermissionContext.for_member(
            membership,
            actor_id,
            author_id=author_id,
            author_role=author_role,
        )

    async def member_user_ids(
        self,
        band_id: UUID,
        roles: Collection[MemberRole] | None = None,
        exclude: Collection[UUID] = (),
    ) -> tuple[UUID, ...]:
        """User ids of active members, optionally by role."""
        members = await self._membership_oracle.list_members(band_id, roles=roles)
        return tuple(m.user_id for m in members if m.user_id not in exclude)

    async def eligible_voter_count(
        self, band_id: UUID, settings: BandGovernanceSettings
    ) -> int:
        """Active members holding a voting role."""
        return len(await self.member_user_ids(band_id, roles=settings.voting_roles))
