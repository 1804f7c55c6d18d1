"""Shared pytest fixtures for s3reqkit tests.

Prometheus collectors live in the global registry, so metrics are
registered once per session rather than per test.
"""

import logging
import time

import pytest

from s3reqkit import metrics


@pytest.fixture(scope="session")
def registered_metrics():
    """Register the s3reqkit Prometheus metrics once for the session."""
    metrics.init_metrics()
    return metrics


@pytest.fixture
def restore_root_logging():
    """Restore root logger handlers and level after a test reconfigures them."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def utc_plus_three(monkeypatch):
    """Switch the process time zone to a fixed UTC+3 offset for one test."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset() is not available on this platform")
    monkeypatch.setenv("TZ", "XYZ-3")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
