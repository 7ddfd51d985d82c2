"""Membership Oracle port.

The Band's membership records are owned outside the governance core.
The oracle answers "what role does this user hold, and is it active",
lists members for notification fan-out and eligible-voter counts, and
performs the one membership write governance owns: promoting a member
to FOUNDER when a nomination passes.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Protocol
from uuid import UUID

from bandgov.domain.models.membership import MemberRole, Membership


class MembershipOracleProtocol(Protocol):
    """Protocol for membership lookups."""

    async def get_membership(self, band_id: UUID, user_id: UUID) -> Membership | None:
        """The user's membership in the band, or None."""
        ...

    async def get_member_by_id(
        self, band_id: UUID, member_id: UUID
    ) -> Membership | None:
        """Look a membership up by its own id."""
        ...

    async def list_members(
        self,
        band_id: UUID,
        roles: Collection[MemberRole] | None = None,
        active_only: bool = True,
    ) -> list[Membership]:
        """Members of the band, optionally filtered by role.

        Args:
            band_id: The band.
            roles: Only members holding one of these roles (all if None).
            active_only: Skip INACTIVE memberships.
        """
        ...

    async def promote_to_founder(self, band_id: UUID, member_id: UUID) -> Membership:
        """Set the member's role to FOUNDER.

        Raises:
            MembershipNotFoundError: If the member does not exist.
        """
        ...
