"""Force a stub method to suspend, so gathered operations interleave.

The in-memory stubs never await anything that yields, so two coroutines
passed to asyncio.gather would otherwise run one after the other. Real
adapters suspend on I/O; suspend_before() reproduces that at a chosen
call site.
"""

from __future__ import annotations

import asyncio
from typing import Any

import pytest


def suspend_before(
    monkeypatch: pytest.MonkeyPatch, target: object, method_name: str
) -> None:
    """Make ``target.method_name`` yield to the event loop before running."""
    original = getattr(target, method_name)

    async def suspending(*args: Any, **kwargs: Any) -> Any:
        await asyncio.sleep(0)
        return await original(*args, **kwargs)

    monkeypatch.setattr(target, method_name, suspending)
