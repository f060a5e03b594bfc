"""
Binding set type definitions.
"""

from collections.abc import Mapping as MappingABC
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional


class ResolutionMode(str, Enum):
    """Which variables a template is allowed to see."""
    FILE_ONLY_DEFAULT = "file-only-default"
    FILE_ONLY_EXPLICIT = "file-only-explicit"
    ALL_ENV_DEFAULT = "all-env-default"
    ALL_ENV_EXPLICIT = "all-env-explicit"

    @classmethod
    def select(cls, expose_all: bool, explicit_source: bool) -> "ResolutionMode":
        if expose_all:
            return cls.ALL_ENV_EXPLICIT if explicit_source else cls.ALL_ENV_DEFAULT
        return cls.FILE_ONLY_EXPLICIT if explicit_source else cls.FILE_ONLY_DEFAULT

    @property
    def exposes_environment(self) -> bool:
        return self in (ResolutionMode.ALL_ENV_DEFAULT, ResolutionMode.ALL_ENV_EXPLICIT)


@dataclass(frozen=True)
class BindingSet(MappingABC):
    """
    Resolved variables for a single render.

    Attributes:
        values: Read-only mapping of variable name to string value
        mode: Resolution mode the set was produced under
        source: Canonical path of the file that contributed values, if any
    """
    values: Mapping[str, str] = field(default_factory=dict)
    mode: ResolutionMode = ResolutionMode.FILE_ONLY_DEFAULT
    source: Optional[Path] = None

    def __post_init__(self):
        # Copy so later changes to the caller's dict are not visible
        object.__setattr__(self, 'values', MappingProxyType(dict(self.values)))

    def __contains__(self, name: object) -> bool:
        return name in self.values

    def __getitem__(self, name: str) -> str:
        return self.values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def as_dict(self) -> Dict[str, str]:
        """Return a mutable copy of the bindings."""
        return dict(self.values)
