from typing import Any, TypeVar

ConfigType = TypeVar("ConfigType")
"""A module's config dataclass, mapped from the stack configuration."""

ExportsType = TypeVar("ExportsType", bound=Any)
"""A module's exports: a dataclass, or a list of dataclasses, holding Pulumi outputs."""
