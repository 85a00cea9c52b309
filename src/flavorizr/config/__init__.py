"""
Flavor table configuration: models, loading and validation.
"""

from .exceptions import (
    ConfigException,
    DuplicateFlavorError,
    FlavorTableNotFoundError,
    InvalidFlavorTableError,
    NotFoundError,
    UnknownFlavorError,
)
from .loading import PACKAGED_TABLE, load_flavor_table, validate_table
from .models import Flavor, FlavorTable, ResValue

__all__ = [
    'ConfigException',
    'DuplicateFlavorError',
    'Flavor',
    'FlavorTable',
    'FlavorTableNotFoundError',
    'InvalidFlavorTableError',
    'NotFoundError',
    'PACKAGED_TABLE',
    'ResValue',
    'UnknownFlavorError',
    'load_flavor_table',
    'validate_table',
]
