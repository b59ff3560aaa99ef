"""
Module discovery utilities for the KCM Search runtime.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple

from core.settings import DEFAULT_APPLICATIONS_DIR, DEFAULT_LEGACY_DIR
from kcm_search import logger as app_logger
from shared.descriptor_schema import DescriptorReadError, load_descriptor
from shared.module_descriptor import ModuleDescriptor

_LOGGER = app_logger.get_logger()

DESCRIPTOR_SUFFIX = ".desktop"
MODULE_PREFIX = "kcm_"


@dataclass(slots=True)
class ScanResult:
    modules: List[ModuleDescriptor]
    errors: List[Tuple[Path, Exception]]


@dataclass(frozen=True, slots=True)
class Origin:
    """One directory of descriptor records and the filename filter applied to it."""

    label: str
    directory: Path
    prefix: str = ""
    suffix: str = DESCRIPTOR_SUFFIX

    def accepts(self, filename: str) -> bool:
        return filename.startswith(self.prefix) and filename.endswith(self.suffix)


@dataclass
class DescriptorScanner:
    """
    Scans the modern applications directory, then the legacy services
    directory, and returns the deduplicated modules sorted by name.
    """

    applications_dir: Path = field(default_factory=lambda: DEFAULT_APPLICATIONS_DIR)
    legacy_dir: Path = field(default_factory=lambda: DEFAULT_LEGACY_DIR)

    def __post_init__(self) -> None:
        self.applications_dir = Path(self.applications_dir)
        self.legacy_dir = Path(self.legacy_dir)

    @property
    def origins(self) -> Tuple[Origin, ...]:
        return (
            Origin(label="applications", directory=self.applications_dir, prefix=MODULE_PREFIX),
            Origin(label="legacy", directory=self.legacy_dir),
        )

    def scan(self) -> ScanResult:
        modules: List[ModuleDescriptor] = []
        errors: List[Tuple[Path, Exception]] = []
        seen: Set[str] = set()

        for origin in self.origins:
            for path in _list_records(origin, errors):
                try:
                    module = load_descriptor(path)
                except DescriptorReadError as exc:
                    _LOGGER.warning("Skipping unreadable descriptor {}: {}", path, exc)
                    errors.append((path, exc))
                    continue

                if module is None:
                    _LOGGER.debug("{} does not describe a configuration module.", path)
                    continue
                if module.id in seen:
                    _LOGGER.debug("Ignoring duplicate module id {} from {}", module.id, path)
                    continue
                seen.add(module.id)
                modules.append(module)

        sorted_modules = sort_modules(modules)
        _LOGGER.info(
            "Discovered {} configuration modules ({} unreadable records).",
            len(sorted_modules),
            len(errors),
        )
        return ScanResult(modules=sorted_modules, errors=errors)


def scan_modules(
    applications_dir: Optional[Path] = None,
    legacy_dir: Optional[Path] = None,
) -> ScanResult:
    """Scan both well-known origins, or the directories given instead."""
    scanner = DescriptorScanner(
        applications_dir=applications_dir or DEFAULT_APPLICATIONS_DIR,
        legacy_dir=legacy_dir or DEFAULT_LEGACY_DIR,
    )
    return scanner.scan()


def sort_modules(modules: Iterable[ModuleDescriptor]) -> List[ModuleDescriptor]:
    """Alphabetise by name the way a human-facing list expects; ties keep input order."""
    return sorted(modules, key=lambda module: collation_key(module.name))


def collation_key(value: str) -> Tuple[str, str, str]:
    """
    Build a sort key approximating locale-aware collation.

    Letters compare first without accents or case, then with accents, and
    finally lowercase sorts before uppercase.
    """
    decomposed = unicodedata.normalize("NFD", value)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return base.casefold(), decomposed.casefold(), value.swapcase()


def _list_records(origin: Origin, errors: List[Tuple[Path, Exception]]) -> List[Path]:
    try:
        entries = sorted(origin.directory.iterdir())
    except (FileNotFoundError, NotADirectoryError):
        return []
    except OSError as exc:
        _LOGGER.error("Unable to list {} directory {}: {}", origin.label, origin.directory, exc)
        errors.append((origin.directory, exc))
        return []

    return [path for path in entries if origin.accepts(path.name) and not path.is_dir()]
