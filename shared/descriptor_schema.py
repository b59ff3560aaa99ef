"""
Descriptor record parsing shared by the scanner and the command-line front-end.

A descriptor record is a ``.desktop`` style text file made of ``Key=Value``
lines. Two schema generations exist: modern records name the settings hub in
``Exec`` and pass the module id as its argument, legacy records carry the id
in ``X-KDE-Library`` and are opened through the legacy shell program.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

from shared.module_descriptor import DEFAULT_ICON, ModuleDescriptor

LAUNCHER_TOKEN = "systemsettings"
LEGACY_SHELL = "kcmshell6"
MAIN_GROUP = "Desktop Entry"

_RECOGNISED_KEYS = {
    "Name",
    "Comment",
    "Icon",
    "X-KDE-Keywords",
    "X-KDE-Library",
    "Exec",
}


class DescriptorReadError(ValueError):
    """Raised when a descriptor record cannot be read from storage."""


@dataclass(frozen=True)
class DescriptorFields:
    """Raw values captured from a record before schema resolution."""

    name: str = ""
    description: str = ""
    icon: str = ""
    keywords: Tuple[str, ...] = ()
    library: str = ""
    exec_command: str = ""


@dataclass(frozen=True)
class Resolution:
    module_id: str
    launch_command: str


@dataclass(frozen=True)
class ResolutionRule:
    """
    One schema generation. The first rule whose ``applies`` check holds owns
    the record; its ``resolve`` may still return ``None`` when the record is
    incomplete for that schema.
    """

    schema: str
    applies: Callable[[DescriptorFields], bool]
    resolve: Callable[[DescriptorFields], Optional[Resolution]]


def _resolve_modern(fields: DescriptorFields) -> Optional[Resolution]:
    parts = fields.exec_command.split()
    if len(parts) < 2:
        return None
    return Resolution(module_id=parts[1], launch_command=fields.exec_command)


def _resolve_legacy(fields: DescriptorFields) -> Optional[Resolution]:
    return Resolution(
        module_id=fields.library,
        launch_command=f"{LEGACY_SHELL} {fields.library}",
    )


RESOLUTION_RULES: Tuple[ResolutionRule, ...] = (
    ResolutionRule(
        schema="modern",
        applies=lambda fields: LAUNCHER_TOKEN in fields.exec_command,
        resolve=_resolve_modern,
    ),
    ResolutionRule(
        schema="legacy",
        applies=lambda fields: bool(fields.library),
        resolve=_resolve_legacy,
    ),
)


def load_descriptor(path: Path) -> Optional[ModuleDescriptor]:
    """
    Read a descriptor record from disk and parse it.

    Returns ``None`` when the record is readable but does not describe a
    module. Raises DescriptorReadError when the file cannot be read.
    """
    try:
        contents = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DescriptorReadError(f"Descriptor file not found: {path}") from exc
    except UnicodeDecodeError as exc:
        raise DescriptorReadError(f"Descriptor is not valid UTF-8: {path}") from exc
    except OSError as exc:
        raise DescriptorReadError(f"Unable to read descriptor: {path}") from exc

    return parse_descriptor(contents, source=path)


def parse_descriptor(text: str, *, source: Optional[Path] = None) -> Optional[ModuleDescriptor]:
    """Parse record text into a ModuleDescriptor, or ``None`` if it is not a module."""
    fields = extract_fields(text)
    if not fields.name:
        return None

    for rule in RESOLUTION_RULES:
        if not rule.applies(fields):
            continue
        resolution = rule.resolve(fields)
        if resolution is None or not resolution.module_id:
            return None
        return ModuleDescriptor(
            id=resolution.module_id,
            name=fields.name,
            description=fields.description or fields.name,
            icon=fields.icon or DEFAULT_ICON,
            keywords=fields.keywords,
            launch_command=resolution.launch_command,
            schema=rule.schema,
            source=source,
        )

    return None


def extract_fields(text: str) -> DescriptorFields:
    """Collect the recognised unlocalised keys of the main group."""
    values = _read_entries(text)
    return DescriptorFields(
        name=values.get("Name", ""),
        description=values.get("Comment", ""),
        icon=values.get("Icon", ""),
        keywords=split_keywords(values.get("X-KDE-Keywords", "")),
        library=values.get("X-KDE-Library", ""),
        exec_command=values.get("Exec", ""),
    )


def split_keywords(value: str) -> Tuple[str, ...]:
    return tuple(keyword.strip() for keyword in value.split(",") if keyword.strip())


def _read_entries(text: str) -> Dict[str, str]:
    values: Dict[str, str] = {}
    group: Optional[str] = None

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        if line.startswith("[") and line.endswith("]"):
            group = line[1:-1].strip()
            continue

        # Lines before any header belong to the main entry.
        if group is not None and group != MAIN_GROUP:
            continue

        key, separator, value = line.partition("=")
        if not separator:
            continue
        key = key.strip()
        if "[" in key or key not in _RECOGNISED_KEYS:
            continue
        values[key] = value.strip()

    return values
