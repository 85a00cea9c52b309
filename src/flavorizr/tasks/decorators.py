"""
Task decorators for flavor table loading.
"""
import functools
import sys

from flavorizr.config.exceptions import ConfigException
from flavorizr.config.loading import load_flavor_table
from flavorizr.config.logging import setup_logging


def flavor_table(func):
    """Decorator that loads the flavor table named by the task's --table/--overlay options.

    The decorated task receives the loaded table as the ``table`` keyword in
    place of the path given on the command line. Configuration errors are
    reported with their guidance and end the run with exit code 1.
    """
    @functools.wraps(func)
    def wrapper(ctx, *args, **kwargs):
        setup_logging(debug=kwargs.get('debug', False))

        table_path = kwargs.pop('table', None)
        overlays = kwargs.pop('overlay', None) or None
        try:
            table = load_flavor_table(table_path, overlays)
        except ConfigException as e:
            print(e.guidance, file=sys.stderr)
            sys.exit(1)

        try:
            return func(ctx, *args, table=table, **kwargs)
        except ConfigException as e:
            print(e.guidance, file=sys.stderr)
            sys.exit(1)
    return wrapper
