"""
Entry point for the kcm_search console front-end.
"""

from __future__ import annotations

import argparse
import json
from typing import List, Optional, Sequence

from core.module_scanner import DescriptorScanner
from core.session import SearchSession
from core.settings import read_settings
from kcm_search import logger as app_logger
from shared.module_descriptor import ModuleDescriptor

_LOGGER = app_logger.get_logger()

EXIT_OK = 0
EXIT_LAUNCH_FAILED = 1
EXIT_UNKNOWN_MODULE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kcm-search",
        description="Search KDE System Settings modules installed on this machine.",
    )
    parser.add_argument("query", nargs="?", default="", help="Text to match against names, descriptions and keywords.")
    action = parser.add_mutually_exclusive_group()
    action.add_argument("--open", metavar="ID", dest="open_id", help="Open the module with this id.")
    action.add_argument("--copy-id", metavar="ID", dest="copy_id", help="Print the id of the module with this id.")
    parser.add_argument("--json", action="store_true", help="Print matches as JSON.")
    return parser


def _print_modules(modules: List[ModuleDescriptor], *, as_json: bool) -> None:
    if as_json:
        print(json.dumps([module.to_dict() for module in modules], indent=2))
        return
    for module in modules:
        line = f"{module.id:<32} {module.name}"
        if module.subtitle:
            line = f"{line} - {module.subtitle}"
        print(line)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run a single search session from the command line."""
    args = build_parser().parse_args(argv)
    settings = read_settings()

    session = SearchSession(
        scanner=DescriptorScanner(
            applications_dir=settings.applications_dir,
            legacy_dir=settings.legacy_dir,
        ),
        launch_timeout_seconds=settings.launch_timeout_seconds,
        initial_query=args.query,
    )
    session.start()

    target_id = args.open_id or args.copy_id
    if target_id:
        module = session.find(target_id)
        if module is None:
            _LOGGER.error("No configuration module with id {!r}.", target_id)
            return EXIT_UNKNOWN_MODULE
        if args.copy_id:
            print(session.copy_module_id(module))
            return EXIT_OK
        result = session.open_module(module)
        return EXIT_OK if result.ok else EXIT_LAUNCH_FAILED

    _print_modules(session.results, as_json=args.json)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
