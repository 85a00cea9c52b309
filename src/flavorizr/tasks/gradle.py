"""
Gradle fragment generation task.
"""

import logging
import sys
from pathlib import Path

from invoke import task

from flavorizr.render import DEFAULT_GRADLE_OUTPUT, render_gradle, write_gradle
from flavorizr.tasks.decorators import flavor_table
from flavorizr.tasks.flavors import TABLE_HELP

logger = logging.getLogger(__name__)


@task(
    help=dict(
        TABLE_HELP,
        output=f"Fragment to write (default: {DEFAULT_GRADLE_OUTPUT})",
        check="Do not write; exit 1 if the fragment on disk is out of date",
    ),
    iterable=['overlay'],
)
@flavor_table
def generate_gradle(ctx, output=None, table=None, overlay=None, check=False, debug=False):
    """
    Generate the flavorizr.gradle.kts fragment from the flavor table.

    Examples:
        invoke generate-gradle
        invoke generate-gradle --overlay=config/firebase.yaml --output=android/app/flavorizr.gradle.kts
        invoke generate-gradle --check
    """
    output = Path(output) if output else DEFAULT_GRADLE_OUTPUT

    if check:
        expected = render_gradle(table)
        current = output.read_text() if output.exists() else None
        if current != expected:
            state = 'missing' if current is None else 'out of date'
            print(f"❌ {output} is {state}; run: invoke generate-gradle", file=sys.stderr)
            sys.exit(1)
        print(f"✅ {output} is up to date", file=sys.stderr)
        return

    for warning in table.warnings:
        print(f"⚠️  {warning}", file=sys.stderr)
    write_gradle(table, output)
    print(f"✅ Wrote {output}", file=sys.stderr)
