"""
Root pytest configuration for flavorizr.
"""

import pytest

# Auto-bootstrap logging for all tests
from flavorizr.config.logging import auto_bootstrap_logging
from flavorizr.table import reset_default_table
auto_bootstrap_logging()(None)


@pytest.fixture(autouse=True)
def clean_flavor_env(monkeypatch):
    """Each test starts from the packaged table with no env overrides."""
    monkeypatch.delenv('FLAVORIZR_TABLE', raising=False)
    monkeypatch.delenv('FLAVORIZR_OVERLAYS', raising=False)
    reset_default_table()
    yield
    reset_default_table()
