"""
Query matching for discovered configuration modules.
"""

from __future__ import annotations

from typing import Iterable, List

from shared.module_descriptor import ModuleDescriptor


def matches(module: ModuleDescriptor, query: str) -> bool:
    """Case-insensitive substring test against name, description and each keyword."""
    if not query:
        return True
    needle = query.casefold()
    if needle in module.name.casefold():
        return True
    if needle in module.description.casefold():
        return True
    return any(needle in keyword.casefold() for keyword in module.keywords)


def filter_modules(modules: Iterable[ModuleDescriptor], query: str) -> List[ModuleDescriptor]:
    """Return the modules matching ``query`` in their original order."""
    return [module for module in modules if matches(module, query)]
