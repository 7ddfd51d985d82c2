"""Unit tests for structured logging configuration."""

from collections.abc import Iterator

import pytest
import structlog
from structlog.testing import capture_logs

from bandgov.application.observability.correlation import (
    correlation_id_processor,
    generate_correlation_id,
    set_correlation_id,
)
from bandgov.application.services.base import LoggingMixin
from bandgov.bootstrap import configure_logging
from bandgov.config import DEVELOPMENT_GOVERNANCE_CONFIG, GovernanceConfig
from bandgov.infrastructure.observability import get_logger_for_component


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()
    set_correlation_id("")


def _renderer() -> object:
    return structlog.get_config()["processors"][-1]


class TestConfigureLogging:
    def test_production_renders_json(self) -> None:
        configure_logging(GovernanceConfig())
        assert isinstance(_renderer(), structlog.processors.JSONRenderer)

    def test_development_renders_console(self) -> None:
        configure_logging(DEVELOPMENT_GOVERNANCE_CONFIG)
        assert isinstance(_renderer(), structlog.dev.ConsoleRenderer)

    def test_correlation_processor_installed(self) -> None:
        configure_logging(GovernanceConfig())
        assert correlation_id_processor in structlog.get_config()["processors"]


class TestCorrelationProcessor:
    def test_adds_correlation_id_when_set(self) -> None:
        correlation_id = generate_correlation_id()
        set_correlation_id(correlation_id)

        event = correlation_id_processor(None, "info", {"event": "proposal_closed"})

        assert event["correlation_id"] == correlation_id

    def test_leaves_event_alone_when_unset(self) -> None:
        event = correlation_id_processor(None, "info", {"event": "proposal_closed"})
        assert "correlation_id" not in event


def test_component_logger_binds_service() -> None:
    with capture_logs() as logs:
        get_logger_for_component("TallyEngine").info("tally_computed")

    assert logs[0]["service"] == "TallyEngine"
    assert logs[0]["component"] == "governance"


class _Recorder(LoggingMixin):
    def __init__(self) -> None:
        self._init_logger()

    def act(self, proposal_id: str) -> None:
        self._log_operation("close_proposal", proposal_id=proposal_id).info(
            "proposal_closed"
        )


class TestLoggingMixin:
    def test_binds_service_and_operation(self) -> None:
        with capture_logs() as logs:
            _Recorder().act("p-1")

        assert logs[0]["service"] == "_Recorder"
        assert logs[0]["operation"] == "close_proposal"
        assert logs[0]["proposal_id"] == "p-1"
        assert "correlation_id" not in logs[0]

    def test_binds_correlation_id_when_set(self) -> None:
        set_correlation_id("req-42")
        with capture_logs() as logs:
            _Recorder().act("p-1")

        assert logs[0]["correlation_id"] == "req-42"
