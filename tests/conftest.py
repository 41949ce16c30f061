"""Root conftest.py for test configuration.

Resets global logging state after each test so structlog configuration and
audit IDs bound by one test never leak into the next.
"""

import logging
from collections.abc import Iterator

import pytest
import structlog

from semver_audit.core.logging import clear_audit_id


@pytest.fixture(autouse=True)
def _reset_logging_state() -> Iterator[None]:
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()
    clear_audit_id()
