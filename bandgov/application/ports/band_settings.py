"""Band settings provider port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from bandgov.domain.models.band_settings import BandGovernanceSettings


class BandSettingsProviderProtocol(Protocol):
    """Read-only access to a band's governance configuration."""

    async def get_settings(self, band_id: UUID) -> BandGovernanceSettings | None:
        """Return the band's settings, or None if the band is unknown."""
        ...
