"""
Flavor table loading with overlays and validation.

A table is loaded in four phases:

1. READING: the base YAML file and each overlay file are parsed.
2. MERGING: overlay entries are applied, in order, onto the base records.
3. BUILDING: records are turned into Flavor models.
4. VALIDATING: validators run; errors raise, warnings are logged and kept
   on the returned table.
"""
import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

import yaml
from pydantic import ValidationError

from .exceptions import (
    ConfigException,
    FlavorTableNotFoundError,
    InvalidFlavorTableError,
)
from .models import DEFAULT_DIMENSION, Flavor, FlavorTable
from .validators import BaseValidator, default_validators

logger = logging.getLogger(__name__)

PACKAGED_TABLE = Path(__file__).resolve().parent.parent / 'flavors.yaml'
TABLE_ENV_VAR = 'FLAVORIZR_TABLE'
OVERLAYS_ENV_VAR = 'FLAVORIZR_OVERLAYS'
TOP_LEVEL_KEYS = ('dimension', 'flavors', 'validators')

PathLike = Union[str, Path]


def resolve_table_path(path: Optional[PathLike] = None) -> Path:
    """Explicit path, then FLAVORIZR_TABLE, then the packaged table."""
    if path:
        return Path(path)
    env_path = os.environ.get(TABLE_ENV_VAR, '').strip()
    if env_path:
        logger.debug(f"Using flavor table from {TABLE_ENV_VAR}: {env_path}")
        return Path(env_path)
    return PACKAGED_TABLE


def resolve_overlay_paths(overlays: Optional[Iterable[PathLike]] = None) -> List[Path]:
    """Explicit overlays, or the os.pathsep-separated list in FLAVORIZR_OVERLAYS."""
    if overlays is not None:
        return [Path(overlay) for overlay in overlays]
    env_overlays = os.environ.get(OVERLAYS_ENV_VAR, '')
    return [Path(item) for item in env_overlays.split(os.pathsep) if item.strip()]


def _read_yaml(path: Path, is_overlay: bool = False) -> Dict[str, Any]:
    """PHASE 1: READING - parse one table or overlay file."""
    if not path.exists():
        raise FlavorTableNotFoundError(str(path))
    if not path.is_file():
        raise InvalidFlavorTableError("Not a regular file", path=str(path))

    # Opened as bytes so PyYAML detects the encoding itself
    try:
        with open(path, 'rb') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidFlavorTableError(f"Could not parse YAML: {e}", path=str(path)) from e
    except OSError as e:
        raise InvalidFlavorTableError(f"Could not read file: {e}", path=str(path)) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidFlavorTableError("File must contain a mapping at the top level", path=str(path))

    unknown = sorted(str(key) for key in data if key not in TOP_LEVEL_KEYS)
    if unknown:
        raise InvalidFlavorTableError(
            f"Unknown top-level key(s): {', '.join(unknown)}",
            path=str(path),
            errors=[f"allowed keys are {', '.join(TOP_LEVEL_KEYS)}"],
        )

    flavors = data.get('flavors')
    if flavors is None and is_overlay:
        flavors = []
    if not isinstance(flavors, list) or (not flavors and not is_overlay):
        raise InvalidFlavorTableError("'flavors' must be a non-empty list of flavor records", path=str(path))

    for index, record in enumerate(flavors):
        if not isinstance(record, dict) or not isinstance(record.get('name'), str):
            raise InvalidFlavorTableError(
                f"Flavor entry #{index + 1} must be a mapping with a string 'name'", path=str(path)
            )

    data['flavors'] = flavors
    logger.debug(f"READING: {len(flavors)} flavor entries from {path}")
    return data


def _apply_overlay(records: List[Dict[str, Any]], overlay: Dict[str, Any],
                   path: Path) -> List[Dict[str, Any]]:
    """PHASE 2: MERGING - apply one overlay's entries onto the base records."""
    merged = copy.deepcopy(records)
    by_name = {}
    for record in merged:
        by_name.setdefault(record['name'], record)

    for entry in overlay['flavors']:
        name = entry['name']
        if name not in by_name:
            raise InvalidFlavorTableError(
                f"Overlay refers to flavor '{name}' which the table does not define",
                path=str(path),
            )
        target = by_name[name]
        for key, value in entry.items():
            if key == 'name':
                continue
            if key == 'res_values':
                if not isinstance(value, dict):
                    raise InvalidFlavorTableError(
                        f"res_values for flavor '{name}' must be a mapping", path=str(path)
                    )
                existing = target.get('res_values') or {}
                if not isinstance(existing, dict):
                    raise InvalidFlavorTableError(
                        f"res_values for flavor '{name}' must be a mapping", path=str(path)
                    )
                merged_values = dict(existing)
                merged_values.update(value)
                target['res_values'] = merged_values
                logger.debug(f"MERGING: {name}.res_values += {sorted(value)} (source: {path})")
            else:
                if key in target and target[key] != value:
                    logger.debug(f"MERGING: {name}.{key} overridden (source: {path})")
                target[key] = value

    return merged


def _build_flavors(records: List[Dict[str, Any]], sources: List[str]) -> List[Flavor]:
    """PHASE 3: BUILDING - turn merged records into Flavor models."""
    flavors = []
    errors = []
    for index, record in enumerate(records):
        try:
            flavors.append(Flavor.model_validate(record))
        except ValidationError as e:
            label = record.get('name', f"#{index + 1}")
            for error in e.errors():
                location = '.'.join(str(part) for part in error['loc']) or 'record'
                errors.append(f"{label}: {location}: {error['msg']}")

    if errors:
        raise InvalidFlavorTableError(
            f"{len(errors)} invalid field(s) in flavor table",
            path=', '.join(sources),
            errors=errors,
        )
    return flavors


def _resolve_validator_class(validator_name: str) -> BaseValidator:
    """Resolve a validator instance from a simple class name or a dotted classpath."""
    if '.' in validator_name:
        module_path, class_name = validator_name.rsplit('.', 1)
    else:
        module_path, class_name = 'flavorizr.config.validators', validator_name

    try:
        module = __import__(module_path, fromlist=[class_name])
        validator_class = getattr(module, class_name)
    except (ImportError, AttributeError) as e:
        raise InvalidFlavorTableError(f"Could not resolve validator '{validator_name}': {e}") from e

    if not (isinstance(validator_class, type) and issubclass(validator_class, BaseValidator)):
        raise InvalidFlavorTableError(f"'{validator_name}' is not a BaseValidator subclass")
    return validator_class()


def _collect_validators_from_config(config: Dict[str, Any]) -> List[str]:
    names = config.get('validators') or []
    if isinstance(names, str):
        names = [names]
    if not isinstance(names, list) or not all(isinstance(name, str) for name in names):
        raise InvalidFlavorTableError("'validators' must be a class name or a list of class names")
    return list(names)


def validate_table(table: FlavorTable,
                   validators: Optional[Sequence[BaseValidator]] = None) -> List[str]:
    """
    PHASE 4: VALIDATING - run validators against a table.

    Args:
        table: Table to check
        validators: Validators to run (defaults to default_validators())

    Returns:
        Warning messages from all validators, in validator order

    Raises:
        ConfigException: From the first validator that rejects the table
    """
    if validators is None:
        validators = default_validators()

    warnings = []
    for validator in validators:
        logger.debug(f"VALIDATING: running {validator.name}")
        warnings.extend(validator.validate(table))
    return warnings


def load_flavor_table(path: Optional[PathLike] = None,
                      overlays: Optional[Iterable[PathLike]] = None,
                      validators: Optional[Sequence[BaseValidator]] = None) -> FlavorTable:
    """
    Load, merge and validate a flavor table.

    Args:
        path: Base table file (defaults to FLAVORIZR_TABLE or the packaged flavors.yaml)
        overlays: Overlay files applied in order (defaults to FLAVORIZR_OVERLAYS)
        validators: Validators replacing the defaults; validators named under
            ``validators:`` in the files are always added

    Returns:
        The loaded table, with validation warnings in ``table.warnings``

    Raises:
        FlavorTableNotFoundError: If the table or an overlay file is missing
        InvalidFlavorTableError: If a file is malformed or a record is invalid
        DuplicateFlavorError: If names or application IDs collide
    """
    table_path = resolve_table_path(path)
    overlay_paths = resolve_overlay_paths(overlays)

    base = _read_yaml(table_path)
    records = base['flavors']
    dimension = base.get('dimension', DEFAULT_DIMENSION)
    validator_names = _collect_validators_from_config(base)
    sources = [str(table_path)]

    for overlay_path in overlay_paths:
        overlay = _read_yaml(overlay_path, is_overlay=True)
        records = _apply_overlay(records, overlay, overlay_path)
        dimension = overlay.get('dimension', dimension)
        validator_names.extend(_collect_validators_from_config(overlay))
        sources.append(str(overlay_path))

    flavors = _build_flavors(records, sources)
    try:
        table = FlavorTable(dimension=dimension, flavors=flavors, source=sources)
    except ValidationError as e:
        raise InvalidFlavorTableError(
            "Invalid table settings", path=', '.join(sources),
            errors=[error['msg'] for error in e.errors()],
        ) from e

    active = list(default_validators() if validators is None else validators)
    seen = {validator.name for validator in active}
    for validator_name in validator_names:
        validator = _resolve_validator_class(validator_name)
        if validator.name in seen:
            logger.debug(f"Skipping duplicate validator '{validator_name}'")
            continue
        active.append(validator)
        seen.add(validator.name)

    warnings = validate_table(table, active)
    for warning in warnings:
        logger.warning(f"Flavor table {', '.join(sources)}: {warning}")

    logger.info(f"Loaded {len(flavors)} flavors ({', '.join(table.names())}) from {', '.join(sources)}")
    return table.model_copy(update={'warnings': tuple(warnings)})


__all__ = [
    'ConfigException',
    'PACKAGED_TABLE',
    'load_flavor_table',
    'resolve_overlay_paths',
    'resolve_table_path',
    'validate_table',
]
