"""
Exception classes with built-in guidance for flavor table loading.
"""
import sys
from typing import List, Optional

TASK_RUNNERS = ('invoke', 'inv', 'flavorizr')


class ConfigException(Exception):
    """Base exception for all flavor configuration errors."""
    def __init__(self, message: str, error_type: str = None, path: str = None,
                 flavor_name: str = None):
        super().__init__(message)
        self.error_type = error_type
        self.path = path
        self.flavor_name = flavor_name
        self.guidance = self._generate_guidance()

    def _get_task_runner(self):
        """The task runner to suggest in hints: invoke unless already running under flavorizr or invoke."""
        executable = sys.argv[0].split('/')[-1] if sys.argv else ''
        if executable in TASK_RUNNERS:
            return executable
        return 'invoke'

    def _generate_guidance(self):
        """Override in subclasses to provide specific guidance."""
        return f"""
❌ Configuration error: {self}
💡 Check your flavor table and try again
"""


class NotFoundError(ConfigException, KeyError):
    """Raised when a requested item is not present in the flavor table."""

    def __str__(self):
        # KeyError would otherwise repr() the message
        return Exception.__str__(self)


class UnknownFlavorError(NotFoundError):
    """Raised when a flavor name is not one of the defined flavors."""
    def __init__(self, flavor_name: str, available: Optional[List[str]] = None):
        self.available = list(available or [])
        message = f"Unknown flavor '{flavor_name}'"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message, error_type="unknown_flavor", flavor_name=flavor_name)

    def _generate_guidance(self):
        runner = self._get_task_runner()
        available = ', '.join(self.available) if self.available else 'none defined'
        return f"""
❌ Flavor '{self.flavor_name}' is not defined in the flavor table
💡 Use one of the defined flavors: {available}
   To see every flavor: {runner} list-flavors
"""


class FlavorTableNotFoundError(ConfigException):
    """Raised when the flavor table or an overlay file does not exist."""
    def __init__(self, path: str):
        super().__init__(f"Flavor table not found: {path}", error_type="table_not_found", path=path)

    def _generate_guidance(self):
        return f"""
❌ Flavor table file '{self.path}' does not exist
💡 Resolve this in one of the following ways:
   1. Pass an existing file: --table=path/to/flavors.yaml
   2. Or unset FLAVORIZR_TABLE to use the packaged table
"""


class InvalidFlavorTableError(ConfigException):
    """Raised when a flavor table or overlay cannot be parsed or has the wrong shape."""
    def __init__(self, message: str, path: str = None, errors: Optional[List[str]] = None):
        self.errors = list(errors or [])
        super().__init__(message, error_type="invalid_table", path=path)

    def _generate_guidance(self):
        details = ''.join(f"\n   - {error}" for error in self.errors)
        location = f" in '{self.path}'" if self.path else ''
        return f"""
❌ Invalid flavor table{location}: {self}{details}
💡 Every flavor needs name, application_id and display_name; see the packaged flavors.yaml
"""


class DuplicateFlavorError(ConfigException):
    """Raised when two flavors share a name or an application ID."""
    def __init__(self, field: str, value: str, flavors: List[str]):
        self.field = field
        self.value = value
        self.flavors = list(flavors)
        super().__init__(
            f"Duplicate {field} '{value}' declared by flavors: {', '.join(self.flavors)}",
            error_type="duplicate_flavor",
        )

    def _generate_guidance(self):
        return f"""
❌ {self}
💡 Each flavor must have a distinct {self.field} so build variants do not collide
"""
