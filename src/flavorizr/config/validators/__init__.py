"""
Flavor table validators.

Validators are run by load_flavor_table after the table is parsed. Extra
validators can be named in a table or overlay file under ``validators:``,
either by simple class name (resolved in this package) or by dotted path.
"""

from .base import BaseValidator
from .firebase import FirebaseConsistencyValidator, has_consistent_firebase_config
from .uniqueness import UniqueApplicationIdValidator, UniqueNameValidator


def default_validators():
    """Validators applied to every loaded table."""
    return [
        UniqueNameValidator(),
        UniqueApplicationIdValidator(),
        FirebaseConsistencyValidator(),
    ]


__all__ = [
    'BaseValidator',
    'FirebaseConsistencyValidator',
    'UniqueApplicationIdValidator',
    'UniqueNameValidator',
    'default_validators',
    'has_consistent_firebase_config',
]
