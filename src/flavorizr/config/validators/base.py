"""
Base validator class for flavor table validation.

Validators run after a flavor table has been loaded and parsed. A validator
raises ConfigException for a table that must not be used, and returns
warning messages for problems the caller should see but that do not block
the build.
"""

from abc import ABC, abstractmethod
from typing import List

from ..models import FlavorTable


class BaseValidator(ABC):
    """Abstract base class for flavor table validators."""

    def __init__(self, name: str = None):
        """Initialize the validator.

        Args:
            name: Optional name for the validator (defaults to class name)
        """
        self.name = name or self.__class__.__name__

    @abstractmethod
    def validate(self, table: FlavorTable) -> List[str]:
        """Validate a loaded table.

        Args:
            table: The flavor table to check

        Returns:
            Warning messages (empty when the table is clean)

        Raises:
            ConfigException: If the table violates an invariant
        """
        pass

    def __repr__(self):
        return f"<{self.name}>"
