"""
Firebase configuration consistency check.

Either every flavor names a Firebase configuration file or none does. A mixed
table usually means one declaration is stale, but which one cannot be told
from the table itself, so the mismatch is reported as a warning and the
table is left as declared.
"""
import logging
from typing import Iterable, List

from ..models import Flavor, FlavorTable
from .base import BaseValidator

logger = logging.getLogger(__name__)


def has_consistent_firebase_config(flavors: Iterable[Flavor]) -> bool:
    """True when all flavors or no flavors define firebase_config_path."""
    present = {flavor.firebase_config_path is not None for flavor in flavors}
    return len(present) <= 1


class FirebaseConsistencyValidator(BaseValidator):
    """Warns when only some flavors define firebase_config_path."""

    def validate(self, table: FlavorTable) -> List[str]:
        if has_consistent_firebase_config(table.flavors):
            return []

        missing = [f.name for f in table.flavors if f.firebase_config_path is None]
        defined = [f.name for f in table.flavors if f.firebase_config_path is not None]
        message = (
            f"firebase_config_path is defined for {', '.join(defined)} "
            f"but missing for {', '.join(missing)}"
        )
        logger.debug(f"{self.name}: {message}")
        return [message]
