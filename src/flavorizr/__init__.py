"""
flavorizr: canonical Android product flavor table and Gradle fragment generator.
"""
from invoke import Collection

from .config.exceptions import NotFoundError, UnknownFlavorError
from .config.loading import load_flavor_table
from .config.models import Flavor, FlavorTable
from .table import flavor_names, get_flavor, list_flavors

__version__ = '0.1.0'

# Create namespace and collect tasks from each submodule
namespace = Collection()

from .tasks import flavors, gradle

for submodule in [flavors, gradle]:
    submodule_collection = Collection.from_module(submodule)
    for task_name, task in submodule_collection.tasks.items():
        namespace.add_task(task)

__all__ = [
    'Flavor',
    'FlavorTable',
    'NotFoundError',
    'UnknownFlavorError',
    'flavor_names',
    'get_flavor',
    'list_flavors',
    'load_flavor_table',
    'namespace',
]
