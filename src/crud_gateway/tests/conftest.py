"""
Core pytest configuration for the entire test suite.

No database is needed: endpoint tests run against the in-memory FakeStorage,
everything else is pure functions.

Domain-specific fixtures are located in:
- tests/test_fixtures/api_fixtures.py

and re-exported at the bottom of this module so every test can use them
without importing.
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import logging

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Set the level for noisy third-party loggers at import time, before importing
# modules that might initialize them.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "asyncio",
    "httpx",
    "inflect",
    "typeguard",
    "urllib3",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest

from crud_gateway.config.settings import Settings
from crud_gateway.core.logging.builder import setup_logging

logger = logging.getLogger(__name__)


# -------------------------------
# Logging: install application logging early
# -------------------------------
@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install application logging for the entire test session.

    What this does:
      - Calls `setup_logging(...)` with stdout-only settings so the same
        formatters and filters used by the gateway are active, without writing
        log files.
      - pytest installs its caplog handler on the root logger for every test
        phase, so `caplog.records` keeps working after dictConfig.
    """
    setup_logging(Settings(ENV="testing", LOG_TO_STDOUT=True, LOG_FORMAT="text", LOG_LEVEL="DEBUG"))

    yield


# ------------------------------------------------------------------------------------------------
# Fixtures re-exported from test_fixtures/
# ------------------------------------------------------------------------------------------------
from .test_fixtures.api_fixtures import (  # noqa: E402
    fake_storage,
    gateway_settings,
    client,
    employee_payload,
    department_payload,
)
