"""
Pytest plugin giving tests access to the project's flavor table.

Registered through the ``pytest11`` entry point. Tests request the
``flavor_table`` fixture; ``--flavor-table`` and ``--flavor-overlay`` select
which files it is loaded from.
"""

import pytest

from flavorizr.config.exceptions import ConfigException
from flavorizr.config.loading import load_flavor_table


def pytest_addoption(parser):
    """Add custom command line options for pytest."""
    group = parser.getgroup('flavorizr')
    group.addoption(
        "--flavor-table",
        action="store",
        default=None,
        help="Flavor table YAML for the flavor_table fixture (default: packaged table)"
    )
    group.addoption(
        "--flavor-overlay",
        action="append",
        default=None,
        help="Overlay YAML applied to the flavor table (repeatable)"
    )


@pytest.fixture(scope='session')
def flavor_table(request):
    """The flavor table selected by --flavor-table / --flavor-overlay."""
    path = request.config.getoption("--flavor-table")
    overlays = request.config.getoption("--flavor-overlay")
    try:
        return load_flavor_table(path, overlays)
    except ConfigException as e:
        pytest.fail(f"Could not load flavor table:{e.guidance}", pytrace=False)
