"""Unit tests for IntegrityGate and SideEffectDispatcher."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from uuid6 import uuid7

from bandgov.application.services.integrity_gate import IntegrityGate
from bandgov.application.services.side_effects import SideEffectDispatcher
from bandgov.domain.errors import IntegrityBlockedError
from bandgov.domain.events.governance import GovernanceAuditEvent
from bandgov.domain.models.integrity import (
    IntegrityAction,
    IntegrityCheckResult,
    IntegrityEntityType,
    IntegrityIssue,
    IssueSeverity,
    IssueType,
)
from bandgov.domain.models.notification import (
    GovernanceNotification,
    NotificationType,
)
from bandgov.infrastructure.stubs import AuditLoggerStub, NotifierStub
from tests.helpers import GovernanceWorld
from tests.helpers.governance_world import BLOCKED_TERM, FLAGGED_TERM, make_content

FLAG = IntegrityIssue(IssueType.SCOPE, IssueSeverity.FLAG, "Off-topic for the band")
BLOCK = IntegrityIssue(IssueType.LEGALITY, IssueSeverity.BLOCK, "Illegal content")


def _hook(result: IntegrityCheckResult) -> AsyncMock:
    hook = AsyncMock()
    hook.check.return_value = result
    return hook


class TestIntegrityGate:
    async def test_clean_content_passes(self) -> None:
        hook = _hook(IntegrityCheckResult(can_proceed=True))
        gate = IntegrityGate(hook)
        band_id = uuid7()

        issues = await gate.screen(IntegrityAction.CREATE, band_id, {"title": "ok"})

        assert issues == ()
        hook.check.assert_awaited_once_with(
            IntegrityEntityType.PROPOSAL,
            IntegrityAction.CREATE,
            band_id,
            {"title": "ok"},
            parent_id=None,
        )

    async def test_block_cannot_be_overridden(self) -> None:
        gate = IntegrityGate(_hook(IntegrityCheckResult(can_proceed=False, issues=(BLOCK,))))

        with pytest.raises(IntegrityBlockedError) as exc_info:
            await gate.screen(
                IntegrityAction.UPDATE, uuid7(), {"title": "x"}, proceed_with_flags=True
            )
        assert exc_info.value.can_override is False
        assert exc_info.value.issues == (BLOCK,)

    async def test_flag_requires_override(self) -> None:
        gate = IntegrityGate(_hook(IntegrityCheckResult(can_proceed=True, issues=(FLAG,))))

        with pytest.raises(IntegrityBlockedError) as exc_info:
            await gate.screen(IntegrityAction.CREATE, uuid7(), {"title": "x"})
        assert exc_info.value.can_override is True
        assert exc_info.value.to_dict()["issues"] == [FLAG.to_dict()]

    async def test_flag_with_override_returns_issues(self) -> None:
        gate = IntegrityGate(_hook(IntegrityCheckResult(can_proceed=True, issues=(FLAG,))))

        issues = await gate.screen(
            IntegrityAction.CREATE, uuid7(), {"title": "x"}, proceed_with_flags=True
        )
        assert issues == (FLAG,)


class TestIntegrityOnCreate:
    async def test_blocked_content_is_not_stored(self, world: GovernanceWorld) -> None:
        content = make_content(description=f"Let us {BLOCKED_TERM} the door takings.")
        with pytest.raises(IntegrityBlockedError):
            await world.draft(content=content)
        assert await world.repository.list_by_band(world.band_id) == []

    async def test_flagged_content_with_override_is_stored(
        self, world: GovernanceWorld
    ) -> None:
        content = make_content(description=f"Sign an {FLAGGED_TERM} deal with the venue.")
        with pytest.raises(IntegrityBlockedError):
            await world.draft(content=content)

        proposal = await world.container.lifecycle.create_proposal(
            world.band_id, world.conductor.user_id, content, proceed_with_flags=True
        )
        assert len(proposal.integrity_flags) == 1
        assert proposal.integrity_flags[0].severity == IssueSeverity.FLAG


def _notification(recipients: tuple) -> GovernanceNotification:
    return GovernanceNotification(
        type=NotificationType.PROPOSAL_CLOSED,
        band_id=uuid7(),
        subject_id=uuid7(),
        recipient_ids=recipients,
        title="Voting closed",
    )


class TestSideEffectDispatcher:
    async def test_publish_delivers(self) -> None:
        notifier = NotifierStub()
        dispatcher = SideEffectDispatcher(notifier, AuditLoggerStub())
        notification = _notification((uuid7(),))

        assert await dispatcher.publish(notification) is True
        assert notifier.published == [notification]

    async def test_publish_skips_empty_recipients(self) -> None:
        notifier = AsyncMock()
        dispatcher = SideEffectDispatcher(notifier, AuditLoggerStub())

        assert await dispatcher.publish(_notification(())) is True
        notifier.publish.assert_not_awaited()

    async def test_notifier_failure_is_reported_not_raised(self) -> None:
        notifier = NotifierStub()
        notifier.set_fail()
        dispatcher = SideEffectDispatcher(notifier, AuditLoggerStub())

        assert await dispatcher.publish(_notification((uuid7(),))) is False
        assert await dispatcher.notify_voters_of_edit(uuid7(), "reason", [uuid7()]) is False

    async def test_audit_failure_is_reported_not_raised(self) -> None:
        audit = AuditLoggerStub()
        audit.set_save_should_fail(True)
        dispatcher = SideEffectDispatcher(NotifierStub(), audit)
        event = GovernanceAuditEvent(
            event_type="proposal.closed",
            band_id=uuid7(),
            subject_id=uuid7(),
            actor_id=None,
            occurred_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        )

        assert await dispatcher.audit(event) is False
        assert audit.events == []

    async def test_failing_notifier_does_not_undo_commit(
        self, world: GovernanceWorld
    ) -> None:
        world.notifier.set_fail()
        world.audit.set_save_should_fail(True)

        proposal = await world.pending()

        stored = await world.container.lifecycle.get_proposal(proposal.id)
        assert stored.status == proposal.status
        assert world.notifier.published == []
