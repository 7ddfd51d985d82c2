"""Integrity Gate: applies the Integrity Hook's answer to a mutation.

- can_proceed False: IntegrityBlockedError, no override possible.
- issues but can_proceed True: IntegrityBlockedError with
  can_override=True unless the caller passed proceed_with_flags.
- otherwise: the mutation goes ahead; overridden issues are returned so
  the caller can record them.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from bandgov.application.ports.integrity_hook import IntegrityHookProtocol
from bandgov.application.services.base import LoggingMixin
from bandgov.domain.errors.integrity import IntegrityBlockedError
from bandgov.domain.models.integrity import (
    IntegrityAction,
    IntegrityEntityType,
    IntegrityIssue,
)


class IntegrityGate(LoggingMixin):
    """Consults the Integrity Hook before content is written."""

    def __init__(self, hook: IntegrityHookProtocol) -> None:
        self._hook = hook
        self._init_logger()

    async def screen(
        self,
        action: IntegrityAction,
        band_id: UUID,
        data: dict[str, Any],
        proceed_with_flags: bool = False,
        entity_type: IntegrityEntityType = IntegrityEntityType.PROPOSAL,
        parent_id: UUID | None = None,
    ) -> tuple[IntegrityIssue, ...]:
        """Check content and decide whether the write may go ahead.

        Args:
            action: CREATE or UPDATE.
            band_id: The band owning the content.
            data: Content fields for the hook.
            proceed_with_flags: Caller accepted warnings in advance.
            entity_type: Kind of entity being written.
            parent_id: Parent entity, when there is one.

        Returns:
            The warnings the caller proceeded past (empty if none).

        Raises:
            IntegrityBlockedError: If blocked, or warned without override.
        """
        log = self._log_operation(
            "screen",
            action=action.value,
            entity_type=entity_type.value,
            band_id=str(band_id),
        )
        result = await self._hook.check(
            entity_type, action, band_id, data, parent_id=parent_id
        )
        if not result.can_proceed:
            log.info("integrity_blocked", issues=len(result.issues))
            raise IntegrityBlockedError(result.issues, can_override=False)
        if result.issues and not proceed_with_flags:
            log.info("integrity_warnings_require_override", issues=len(result.issues))
            raise IntegrityBlockedError(result.issues, can_override=True)
        if result.issues:
            log.info("integrity_warnings_overridden", issues=len(result.issues))
        return result.issues
