"""Production adapters for governance ports."""

from bandgov.infrastructure.adapters.structlog_audit_logger import (
    StructlogAuditLogger,
)
from bandgov.infrastructure.adapters.system_time_authority import SystemTimeAuthority

__all__ = ["StructlogAuditLogger", "SystemTimeAuthority"]
