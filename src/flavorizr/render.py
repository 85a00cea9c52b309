"""
Rendering of a flavor table for the Android build.

The Gradle fragment applies each flavor's applicationId and string
resources to the app module's product flavors.
"""
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .config.models import Flavor, FlavorTable

logger = logging.getLogger(__name__)

DEFAULT_GRADLE_OUTPUT = Path('android') / 'app' / 'flavorizr.gradle.kts'

GRADLE_HEADER = """\
// Generated by flavorizr. Do not edit; run `invoke generate-gradle` instead.
import com.android.build.gradle.AppExtension

val android = project.extensions.getByType(AppExtension::class.java)
"""

_KOTLIN_ESCAPES = {
    '\\': '\\\\',
    '"': '\\"',
    '$': '\\$',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
}


def kotlin_string(value: str) -> str:
    """Quote a value as a Kotlin string literal."""
    return '"' + ''.join(_KOTLIN_ESCAPES.get(char, char) for char in value) + '"'


def render_gradle(table: FlavorTable) -> str:
    """Render the Kotlin script fragment declaring every flavor of the table."""
    dimension = kotlin_string(table.dimension)
    lines = [
        GRADLE_HEADER,
        "android.apply {",
        f"    flavorDimensions({dimension})",
        "",
        "    productFlavors {",
    ]
    for flavor in table.flavors:
        lines.append(f"        create({kotlin_string(flavor.name)}) {{")
        lines.append(f"            dimension = {dimension}")
        lines.append(f"            applicationId = {kotlin_string(flavor.application_id)}")
        for res in flavor.resource_values():
            lines.append(
                f"            resValue(type = {kotlin_string(res.type)}, "
                f"name = {kotlin_string(res.name)}, value = {kotlin_string(res.value)})"
            )
        lines.append("        }")
    lines.append("    }")
    lines.append("}")
    return '\n'.join(lines) + '\n'


def write_gradle(table: FlavorTable, output: Union[str, Path] = DEFAULT_GRADLE_OUTPUT) -> Path:
    """Write the Gradle fragment, creating parent directories as needed."""
    output = Path(output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(render_gradle(table))
    logger.info(f"Wrote {len(table.flavors)} flavors to {output}")
    return output


def flavor_to_dict(flavor: Flavor) -> Dict[str, Any]:
    record = flavor.model_dump(exclude_none=True)
    if flavor.res_values:
        record['res_values'] = dict(flavor.res_values)
    else:
        record.pop('res_values', None)
    return record


def table_to_dict(table: FlavorTable) -> Dict[str, Any]:
    """Plain-data form of a table, in the same shape as flavors.yaml."""
    return {
        'dimension': table.dimension,
        'flavors': [flavor_to_dict(flavor) for flavor in table.flavors],
    }


def dump_table_yaml(table: FlavorTable) -> str:
    return yaml.safe_dump(table_to_dict(table), default_flow_style=False, sort_keys=False)
