"""Test helpers for bandgov tests.

Helpers:
    FakeTimeAuthority: Controllable time authority for deterministic tests
    GovernanceWorld: A band with members wired to the in-memory stubs
    suspend_before: Make a stub method yield so gathered calls interleave

Usage:
    from tests.helpers import FakeTimeAuthority, GovernanceWorld
"""

from tests.helpers.fake_time_authority import FakeTimeAuthority
from tests.helpers.governance_world import GovernanceWorld
from tests.helpers.interleaving import suspend_before

__all__ = ["FakeTimeAuthority", "GovernanceWorld", "suspend_before"]
