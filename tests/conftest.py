"""
Pytest configuration and shared fixtures for bandgov tests.

Testing Standards:
- Async tests run under pytest-asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async collaborators, stubs for stateful ones
- Unit tests go in tests/unit/<layer>/
- Integration tests go in tests/integration/
"""

from datetime import datetime, timezone

import pytest

from tests.helpers import FakeTimeAuthority, GovernanceWorld


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from bandgov import __version__

    return __version__


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Clock frozen at 2026-01-15 10:00 UTC."""
    return FakeTimeAuthority(frozen_at=datetime(2026, 1, 15, 10, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def world(fake_time_authority: FakeTimeAuthority) -> GovernanceWorld:
    """A reviewed band (SIMPLE_MAJORITY, quorum 50%) wired to stubs."""
    return GovernanceWorld.create(fake_time_authority)
