"""Permission predicates for governance capabilities.

One pure predicate per capability, evaluated over a PermissionContext
describing the actor. Predicates answer role and identity questions
only; status legality is the state machine's job and raises
InvalidStateError, not PermissionDeniedError.

Inactive members hold no capability.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from bandgov.domain.errors.permission import PermissionDeniedError
from bandgov.domain.models.band_settings import BandGovernanceSettings
from bandgov.domain.models.membership import MemberRole, Membership


@dataclass(frozen=True, eq=True)
class PermissionContext:
    """Everything a predicate may look at.

    Attributes:
        actor_id: The acting user.
        role: The actor's role in the Band, None if not a member.
        is_active: Whether the membership is ACTIVE.
        is_author: Whether the actor authored the proposal.
        author_role: The proposal author's current role, if known.
        is_current_founder: Whether the actor is an active FOUNDER now.
    """

    actor_id: UUID
    role: MemberRole | None
    is_active: bool
    is_author: bool = False
    author_role: MemberRole | None = None
    is_current_founder: bool = False

    @classmethod
    def for_member(
        cls,
        membership: Membership | None,
        actor_id: UUID,
        author_id: UUID | None = None,
        author_role: MemberRole | None = None,
    ) -> PermissionContext:
        """Build a context from a (possibly missing) membership."""
        if membership is None:
            return cls(
                actor_id=actor_id,
                role=None,
                is_active=False,
                is_author=author_id == actor_id,
                author_role=author_role,
            )
        return cls(
            actor_id=actor_id,
            role=membership.role,
            is_active=membership.is_active,
            is_author=author_id == actor_id,
            author_role=author_role,
            is_current_founder=membership.is_active and membership.is_founder,
        )

    @property
    def acts(self) -> bool:
        return self.role is not None and self.is_active


def can_create(ctx: PermissionContext, settings: BandGovernanceSettings) -> bool:
    return ctx.acts and ctx.role in settings.creator_roles


def can_submit(ctx: PermissionContext) -> bool:
    return ctx.acts and ctx.is_author


def can_edit(ctx: PermissionContext) -> bool:
    return ctx.acts and ctx.is_author


def can_withdraw(ctx: PermissionContext) -> bool:
    return ctx.acts and ctx.is_author


def can_review(ctx: PermissionContext, settings: BandGovernanceSettings) -> bool:
    """Reviewer role, not the author, and senior enough for the author.

    A reviewer must rank at least as high as the author, except that a
    FOUNDER's proposal may be reviewed by any MODERATOR or above.
    """
    role = ctx.role
    if role is None or not ctx.is_active or ctx.is_author:
        return False
    if role not in settings.reviewer_roles:
        return False
    if ctx.author_role == MemberRole.FOUNDER:
        return role.rank >= MemberRole.MODERATOR.rank
    author_rank = ctx.author_role.rank if ctx.author_role is not None else 0
    return role.rank >= author_rank


def can_vote(ctx: PermissionContext, settings: BandGovernanceSettings) -> bool:
    return ctx.acts and ctx.role in settings.voting_roles


def can_close(ctx: PermissionContext, settings: BandGovernanceSettings) -> bool:
    """Author, or a member holding a closer role (FOUNDER/GOVERNOR)."""
    return ctx.acts and (ctx.is_author or ctx.role in settings.closer_roles)


def can_archive(ctx: PermissionContext, settings: BandGovernanceSettings) -> bool:
    return can_close(ctx, settings)


def can_view_history(ctx: PermissionContext) -> bool:
    return ctx.acts


def can_nominate_founder(ctx: PermissionContext) -> bool:
    return ctx.is_current_founder


def can_vote_on_nomination(ctx: PermissionContext, target_user_id: UUID) -> bool:
    return ctx.is_current_founder and ctx.actor_id != target_user_id


def require(
    allowed: bool,
    reason: str,
    ctx: PermissionContext,
    capability: str,
) -> None:
    """Raise PermissionDeniedError unless ``allowed``.

    Args:
        allowed: Result of a predicate.
        reason: Message shown to the caller.
        ctx: The evaluated context.
        capability: Capability name for the error.

    Raises:
        PermissionDeniedError: If not allowed.
    """
    if not allowed:
        raise PermissionDeniedError(
            reason, actor_id=ctx.actor_id, capability=capability
        )
