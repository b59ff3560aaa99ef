"""
Shared representation of a KDE configuration module resolved from a descriptor record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

DEFAULT_ICON = "preferences-system"


@dataclass(frozen=True, slots=True)
class ModuleDescriptor:
    """
    Normalized metadata for one configuration module.

    Built fresh by the parser on every scan and never mutated afterwards.
    ``launch_command`` is the exact shell command that opens the module.
    """

    id: str
    name: str
    launch_command: str
    description: str = ""
    icon: str = DEFAULT_ICON
    keywords: Tuple[str, ...] = ()
    schema: str = "modern"
    source: Optional[Path] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Module descriptor id must be a non-empty string.")
        if not self.name:
            raise ValueError("Module descriptor name must be a non-empty string.")
        if not self.launch_command:
            raise ValueError("Module descriptor launch command must be a non-empty string.")
        if not self.description:
            object.__setattr__(self, "description", self.name)
        if not self.icon:
            object.__setattr__(self, "icon", DEFAULT_ICON)
        object.__setattr__(self, "keywords", tuple(self.keywords))

    @property
    def subtitle(self) -> str:
        """Description suitable for a secondary line; empty when it repeats the name."""
        if self.description != self.name:
            return self.description
        return ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "keywords": list(self.keywords),
            "launch_command": self.launch_command,
            "schema": self.schema,
            "source": str(self.source) if self.source is not None else None,
        }
