"""
Pytest fixtures for the settlement engine test suite.

Provides:
- Structured logging configured for the session, LogContext cleared per test
- captured_logs: settlement_kernel log records as parsed JSON dicts
- Deterministic clock and expense group factories
"""

import json
import logging
from io import StringIO

import pytest

from settlement_kernel.domain.clock import DeterministicClock
from settlement_kernel.domain.ledger import ExpenseGroup
from settlement_kernel.domain.policy import MatchOrdering, SettlementPolicy
from settlement_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture settlement_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            build_report(group)
            logs = captured_logs()
            assert any(r["message"] == "settlement_report_built" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("settlement_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def deterministic_clock():
    return DeterministicClock()


@pytest.fixture
def insertion_policy() -> SettlementPolicy:
    """Policy reproducing the legacy discovery-order matching."""
    return SettlementPolicy(ordering=MatchOrdering.INSERTION)


@pytest.fixture
def make_group(deterministic_clock):
    """Factory for ExpenseGroups on the deterministic clock."""

    def _make(members=("Rahul", "Priya"), **kwargs) -> ExpenseGroup:
        kwargs.setdefault("group_name", "Goa Trip")
        kwargs.setdefault("created_by", "rahul@example.com")
        kwargs.setdefault("clock", deterministic_clock)
        return ExpenseGroup(members=list(members), **kwargs)

    return _make

