"""
Pytest fixtures for the legal calculation test suite.

Provides:
- The packaged reference configuration set and the engine tables built
  from it
- A deterministic clock for evaluation dates
- Logging reset between tests
- Capture of structured log output (``log_stream`` / ``read_logs``)
"""

import json
import logging
from datetime import date
from io import StringIO

import pytest

from juris_config import get_active_config
from juris_config.bridges import build_crime_catalog, build_payroll_tables
from juris_kernel.domain.clock import DeterministicClock
from juris_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture(scope="session")
def reference_config():
    """The packaged configuration set (2024 tables)."""
    return get_active_config(as_of_date=date(2024, 6, 1))


@pytest.fixture(scope="session")
def payroll_tables(reference_config):
    return build_payroll_tables(reference_config)


@pytest.fixture(scope="session")
def crime_catalog(reference_config):
    return build_crime_catalog(reference_config)


@pytest.fixture
def clock():
    return DeterministicClock(date(2024, 6, 1))


@pytest.fixture
def log_stream():
    """Route the juris_kernel logger hierarchy to a JSON stream at DEBUG."""
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    configure_logging(handler=handler, level=logging.DEBUG)
    return stream


@pytest.fixture
def read_logs(log_stream):
    """Callable returning every JSON log line written so far."""

    def _read() -> list[dict]:
        lines = log_stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    return _read
