"""Integrity Hook port.

External content validator consulted before a content-bearing mutation
commits. The governance core treats it as opaque: it blocks when
``can_proceed`` is False and otherwise lets the caller decide whether
to proceed past reported issues.
"""

from __future__ import annotations

from typing import Any, Protocol
from uuid import UUID

from bandgov.domain.models.integrity import (
    IntegrityAction,
    IntegrityCheckResult,
    IntegrityEntityType,
)


class IntegrityHookProtocol(Protocol):
    """Protocol for content integrity validation."""

    async def check(
        self,
        entity_type: IntegrityEntityType,
        action: IntegrityAction,
        band_id: UUID,
        data: dict[str, Any],
        parent_id: UUID | None = None,
    ) -> IntegrityCheckResult:
        """Validate content before it is written.

        Args:
            entity_type: Kind of entity being written.
            action: CREATE or UPDATE.
            band_id: The band the content belongs to.
            data: Content fields to inspect.
            parent_id: Parent entity, when there is one.

        Returns:
            IntegrityCheckResult with can_proceed and issues.
        """
        ...
