"""In-memory band settings provider stub.

WARNING: This stub is for development/testing only.
"""

from __future__ import annotations

from uuid import UUID

from bandgov.application.ports.band_settings import BandSettingsProviderProtocol
from bandgov.config.governance_config import GovernanceConfig
from bandgov.domain.models.band_settings import BandGovernanceSettings


class BandSettingsProviderStub(BandSettingsProviderProtocol):
    """Holds settings per band.

    Bands registered with register_band() and no explicit settings get
    the defaults from GovernanceConfig.
    """

    def __init__(self, config: GovernanceConfig | None = None) -> None:
        self._config = config if config is not None else GovernanceConfig()
        self._settings: dict[UUID, BandGovernanceSettings] = {}

    def register_band(
        self,
        band_id: UUID,
        settings: BandGovernanceSettings | None = None,
    ) -> BandGovernanceSettings:
        """Register a band (for testing) and return its settings."""
        if settings is None:
            settings = self._config.default_settings(band_id)
        self._settings[band_id] = settings
        return settings

    async def get_settings(self, band_id: UUID) -> BandGovernanceSettings | None:
        return self._settings.get(band_id)
