"""
Validators enforcing that flavors do not collide.
"""
import logging
from collections import defaultdict
from typing import Dict, List

from ..exceptions import DuplicateFlavorError
from ..models import FlavorTable
from .base import BaseValidator

logger = logging.getLogger(__name__)


def _find_duplicates(table: FlavorTable, field: str) -> Dict[str, List[str]]:
    owners = defaultdict(list)
    for flavor in table.flavors:
        owners[getattr(flavor, field)].append(flavor.name)
    return {value: names for value, names in owners.items() if len(names) > 1}


class _UniqueFieldValidator(BaseValidator):
    field = None

    def validate(self, table: FlavorTable) -> List[str]:
        duplicates = _find_duplicates(table, self.field)
        if duplicates:
            value, names = next(iter(duplicates.items()))
            raise DuplicateFlavorError(self.field, value, names)
        logger.debug(f"{self.name}: {len(table.flavors)} flavors have distinct {self.field}")
        return []


class UniqueNameValidator(_UniqueFieldValidator):
    """Flavor names must be unique within the table."""
    field = "name"


class UniqueApplicationIdValidator(_UniqueFieldValidator):
    """Application IDs must be unique so build variants do not collide."""
    field = "application_id"
