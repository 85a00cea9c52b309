"""
Pydantic models for the flavor table.
"""
import re
from types import MappingProxyType
from typing import List, Literal, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

FlavorName = Literal["dev", "staging", "prod"]

# Resource names generated from dedicated Flavor fields
APP_NAME_RESOURCE = "app_name"
FIREBASE_CONFIG_RESOURCE = "firebase_config"
RESERVED_RESOURCES = (APP_NAME_RESOURCE, FIREBASE_CONFIG_RESOURCE)

DEFAULT_DIMENSION = "flavor-type"

_APPLICATION_ID_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]*(\.[A-Za-z][A-Za-z0-9_]*)+$")


class ResValue(BaseModel):
    """A generated resource injected into the application's resource set."""
    model_config = ConfigDict(frozen=True)

    type: str = "string"
    name: str
    value: str


class Flavor(BaseModel):
    """A named build variant and its build-time constants."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: FlavorName
    application_id: str
    display_name: str
    firebase_config_path: Optional[str] = None
    # Stored as (name, value) pairs so a shared table cannot be changed in place
    res_values: Tuple[Tuple[str, str], ...] = ()

    @field_validator("application_id")
    @classmethod
    def _check_application_id(cls, value: str) -> str:
        if not _APPLICATION_ID_PATTERN.match(value):
            raise ValueError(f"'{value}' is not a reverse-DNS application ID")
        return value

    @field_validator("display_name")
    @classmethod
    def _check_display_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("display_name cannot be empty")
        return value

    @field_validator("firebase_config_path")
    @classmethod
    def _check_firebase_config_path(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("firebase_config_path cannot be empty; omit it instead")
        return value

    @field_validator("res_values", mode="before")
    @classmethod
    def _pairs_from_mapping(cls, value):
        if isinstance(value, Mapping):
            return tuple(value.items())
        return value

    @field_validator("res_values")
    @classmethod
    def _check_res_values(cls, value: Tuple[Tuple[str, str], ...]) -> Tuple[Tuple[str, str], ...]:
        reserved = [name for name, _ in value if name in RESERVED_RESOURCES]
        if reserved:
            raise ValueError(
                f"res_values cannot redefine {', '.join(reserved)}; "
                f"use display_name / firebase_config_path"
            )
        return value

    @property
    def res_value_map(self) -> Mapping[str, str]:
        """Read-only view of the extra resources."""
        return MappingProxyType(dict(self.res_values))

    def resource_values(self) -> List[ResValue]:
        """Resources generated for this flavor, in emission order."""
        resources = [ResValue(name=APP_NAME_RESOURCE, value=self.display_name)]
        if self.firebase_config_path is not None:
            resources.append(ResValue(name=FIREBASE_CONFIG_RESOURCE, value=self.firebase_config_path))
        for name, value in self.res_values:
            resources.append(ResValue(name=name, value=value))
        return resources


class FlavorTable(BaseModel):
    """The ordered set of flavors for one application."""
    model_config = ConfigDict(frozen=True)

    dimension: str = DEFAULT_DIMENSION
    flavors: Tuple[Flavor, ...]
    source: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()

    def names(self) -> List[str]:
        return [flavor.name for flavor in self.flavors]
