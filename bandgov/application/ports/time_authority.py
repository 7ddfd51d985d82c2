"""Time Authority Protocol - interface for timestamp provisioning.

All services that need timestamps inject a TimeAuthorityProtocol
implementation instead of calling datetime.now() directly. Voting
windows, review times and edit times all come from here, which keeps
window arithmetic deterministic in tests.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority.

    For production:
        Use SystemTimeAuthority from bandgov/infrastructure/adapters/

    For testing:
        Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time, timezone-aware (UTC)."""
        ...
