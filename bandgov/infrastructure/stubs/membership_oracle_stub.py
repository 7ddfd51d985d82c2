"""In-memory Membership Oracle stub.

Tests add members with add_member() and change them with set_role() or
deactivate(); governance services see the change on their next call.

WARNING: This stub is for development/testing only.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import replace
from uuid import UUID

from uuid6 import uuid7

from bandgov.application.ports.membership_oracle import MembershipOracleProtocol
from bandgov.domain.errors.not_found import MembershipNotFoundError
from bandgov.domain.models.membership import MemberRole, MemberStatus, Membership


class MembershipOracleStub(MembershipOracleProtocol):
    """In-memory implementation of MembershipOracleProtocol.

    Attributes:
        _members: member_id -> Membership.
        promotions: member ids promoted to FOUNDER, in order.
    """

    def __init__(self) -> None:
        self._members: dict[UUID, Membership] = {}
        self.promotions: list[UUID] = []

    def add_member(
        self,
        band_id: UUID,
        role: MemberRole,
        user_id: UUID | None = None,
        status: MemberStatus = MemberStatus.ACTIVE,
    ) -> Membership:
        """Add a member and return it (for testing)."""
        membership = Membership(
            member_id=uuid7(),
            band_id=band_id,
            user_id=user_id if user_id is not None else uuid7(),
            role=role,
            status=status,
        )
        self._members[membership.member_id] = membership
        return membership

    def set_role(self, member_id: UUID, role: MemberRole) -> Membership:
        membership = replace(self._members[member_id], role=role)
        self._members[member_id] = membership
        return membership

    def deactivate(self, member_id: UUID) -> Membership:
        membership = replace(self._members[member_id], status=MemberStatus.INACTIVE)
        self._members[member_id] = membership
        return membership

    async def get_membership(self, band_id: UUID, user_id: UUID) -> Membership | None:
        for membership in self._members.values():
            if membership.band_id == band_id and membership.user_id == user_id:
                return membership
        return None

    async def get_member_by_id(
        self, band_id: UUID, member_id: UUID
    ) -> Membership | None:
        membership = self._members.get(member_id)
        if membership is None or membership.band_id != band_id:
            return None
        return membership

    async def list_members(
        self,
        band_id: UUID,
        roles: Collection[MemberRole] | None = None,
        active_only: bool = True,
    ) -> list[Membership]:
        return [
            m
            for m in self._members.values()
            if m.band_id == band_id
            and (roles is None or m.role in roles)
            and (not active_only or m.is_active)
        ]

    async def promote_to_founder(self, band_id: UUID, member_id: UUID) -> Membership:
        if await self.get_member_by_id(band_id, member_id) is None:
            raise MembershipNotFoundError(band_id, member_id)
        self.promotions.append(member_id)
        return self.set_role(member_id, MemberRole.FOUNDER)
