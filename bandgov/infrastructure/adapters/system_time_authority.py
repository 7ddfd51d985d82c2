"""System clock implementation of TimeAuthorityProtocol."""

from __future__ import annotations

from datetime import datetime, timezone

from bandgov.application.ports.time_authority import TimeAuthorityProtocol


class SystemTimeAuthority(TimeAuthorityProtocol):
    """Returns the wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
