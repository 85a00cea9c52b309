"""
Flavor table lookups.

The canonical table is loaded once from the packaged flavors.yaml (or
FLAVORIZR_TABLE / FLAVORIZR_OVERLAYS) and cached; every lookup accepts an
explicit table for callers that loaded their own.
"""
import logging
from typing import List, Optional

from .config.exceptions import UnknownFlavorError
from .config.loading import load_flavor_table
from .config.models import Flavor, FlavorTable

logger = logging.getLogger(__name__)

_default_table: Optional[FlavorTable] = None


def default_table() -> FlavorTable:
    """Load and cache the canonical flavor table."""
    global _default_table

    if _default_table is None:
        _default_table = load_flavor_table()
    return _default_table


def reset_default_table() -> None:
    """Drop the cached canonical table so the next lookup reloads it."""
    global _default_table
    _default_table = None


def get_flavor(name: str, table: Optional[FlavorTable] = None) -> Flavor:
    """
    Look up a flavor by name.

    Args:
        name: Flavor name, e.g. 'dev'
        table: Table to search (defaults to the canonical table)

    Returns:
        The matching Flavor

    Raises:
        UnknownFlavorError: If no flavor has that name (a NotFoundError)
    """
    table = table or default_table()
    for flavor in table.flavors:
        if flavor.name == name:
            return flavor

    logger.debug(f"Flavor lookup failed for '{name}'")
    raise UnknownFlavorError(name, table.names())


def list_flavors(table: Optional[FlavorTable] = None) -> List[Flavor]:
    """All flavors in declaration order."""
    table = table or default_table()
    return list(table.flavors)


def flavor_names(table: Optional[FlavorTable] = None) -> List[str]:
    return [flavor.name for flavor in list_flavors(table)]
