"""
Pytest fixtures for the payroll kernel test suite.

Provides:
- Structured logging setup and log capture
- Registry fixtures with a deterministic clock
- In-memory SQLite sessions for the registry store
"""

import json
import logging
from datetime import datetime, timezone
from io import StringIO
from typing import Generator

import pytest
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from payroll_kernel.config import RegistryConfig
from payroll_kernel.db.engine import (
    create_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from payroll_kernel.domain.clock import DeterministicClock
from payroll_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from payroll_kernel.registry import EmployeeRegistry

# Ledger-style accounts shared by the payroll scenarios
ACCOUNT_A = "0xca35b7d915458ef540ade6068dfe2f44e8fa733c"
ACCOUNT_B = "0xd1220a0cf47c7b9be7a2e6ba89f429762e7b9adb"
ACCOUNT_C = "0xfb6916095ca1df60bb79Ce92ce3ea74c37c5d359"


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
    Capture payroll_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, registry):
            registry.add_employee(ACCOUNT_A, [], 1)
            logs = captured_logs()
            assert any(r["message"] == "employee_added" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("payroll_kernel")
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
# Registry fixtures
# =============================================================================


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock(datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def registry(clock) -> EmployeeRegistry:
    """Fresh registry with default config, like Payroll.new() before each test."""
    return EmployeeRegistry(config=RegistryConfig(), clock=clock)


@pytest.fixture
def staffed_registry(registry) -> EmployeeRegistry:
    """Registry holding the three-employee burn rate scenario (ids 1, 2, 3)."""
    registry.add_employee(ACCOUNT_C, [], 105000)
    registry.add_employee(ACCOUNT_B, [], 85000)
    registry.add_employee(ACCOUNT_A, [], 133000)
    return registry


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """
    Provide a session on a fresh in-memory SQLite database.

    StaticPool keeps the single in-memory connection alive for the whole
    test so every session sees the same database.
    """
    init_engine_from_url(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    create_tables()
    sess = get_session()
    yield sess
    try:
        sess.close()
    finally:
        reset_engine()
