"""
Flavor table inspection tasks.

Outputs:
    stdout: YAML (parseable)
    stderr: Diagnostic information
"""

import logging
import sys

import yaml
from invoke import task

from flavorizr.render import dump_table_yaml, flavor_to_dict
from flavorizr.table import get_flavor
from flavorizr.tasks.decorators import flavor_table

logger = logging.getLogger(__name__)

TABLE_HELP = {
    'table': "Flavor table YAML (default: FLAVORIZR_TABLE or the packaged table)",
    'overlay': "Overlay YAML applied on top of the table (repeatable)",
    'debug': "Enable debug logging",
}


@task(help=TABLE_HELP, iterable=['overlay'])
@flavor_table
def list_flavors(ctx, table=None, overlay=None, debug=False):
    """
    Show every flavor in declaration order.
    """
    print(f"📋 {len(table.flavors)} flavors from {', '.join(table.source)}", file=sys.stderr)
    sys.stdout.write(dump_table_yaml(table))


@task(help=dict(TABLE_HELP, name="Flavor name, e.g. dev"), iterable=['overlay'])
@flavor_table
def show_flavor(ctx, name, table=None, overlay=None, debug=False):
    """
    Show one flavor and the resources generated for it.
    """
    flavor = get_flavor(name, table)
    record = flavor_to_dict(flavor)
    record['resources'] = {res.name: res.value for res in flavor.resource_values()}
    yaml.safe_dump(record, sys.stdout, default_flow_style=False, sort_keys=False)


@task(help=dict(TABLE_HELP, strict="Treat warnings as errors"), iterable=['overlay'])
@flavor_table
def validate_flavors(ctx, table=None, overlay=None, strict=False, debug=False):
    """
    Validate the flavor table and report warnings.

    Duplicate names or application IDs fail the run. Inconsistent Firebase
    configuration is a warning, which fails the run only with --strict.
    """
    for warning in table.warnings:
        print(f"⚠️  {warning}", file=sys.stderr)

    if table.warnings and strict:
        print(f"❌ {len(table.warnings)} warning(s) in strict mode", file=sys.stderr)
        sys.exit(1)

    print(f"✅ {len(table.flavors)} flavors valid ({', '.join(table.names())})", file=sys.stderr)
