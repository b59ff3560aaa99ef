"""
Environment-backed configuration for the KCM Search runtime.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from kcm_search import logger as app_logger

_LOGGER = app_logger.get_logger()

DEFAULT_APPLICATIONS_DIR = Path("/usr/share/applications")
DEFAULT_LEGACY_DIR = Path("/usr/share/kservices5")
DEFAULT_LAUNCH_TIMEOUT_SECONDS = 20.0

_MIN_LAUNCH_TIMEOUT = 1.0
_MAX_LAUNCH_TIMEOUT = 120.0

_APPLICATIONS_DIR_VAR = "KCM_SEARCH_APPLICATIONS_DIR"
_LEGACY_DIR_VAR = "KCM_SEARCH_LEGACY_DIR"
_LAUNCH_TIMEOUT_VAR = "KCM_SEARCH_LAUNCH_TIMEOUT"


@dataclass(eq=True)
class SearchSettings:
    applications_dir: Path = field(default_factory=lambda: DEFAULT_APPLICATIONS_DIR)
    legacy_dir: Path = field(default_factory=lambda: DEFAULT_LEGACY_DIR)
    launch_timeout_seconds: float = DEFAULT_LAUNCH_TIMEOUT_SECONDS


def read_settings(environ: Optional[Mapping[str, str]] = None) -> SearchSettings:
    """Load settings from the environment, falling back to the well-known system paths."""
    env = os.environ if environ is None else environ
    return SearchSettings(
        applications_dir=_read_path(env, _APPLICATIONS_DIR_VAR, DEFAULT_APPLICATIONS_DIR),
        legacy_dir=_read_path(env, _LEGACY_DIR_VAR, DEFAULT_LEGACY_DIR),
        launch_timeout_seconds=_read_timeout(env),
    )


def _read_path(env: Mapping[str, str], name: str, default: Path) -> Path:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    return Path(raw).expanduser()


def _read_timeout(env: Mapping[str, str]) -> float:
    raw = env.get(_LAUNCH_TIMEOUT_VAR, "").strip()
    if not raw:
        return DEFAULT_LAUNCH_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        _LOGGER.warning("Ignoring non-numeric {}={!r}.", _LAUNCH_TIMEOUT_VAR, raw)
        return DEFAULT_LAUNCH_TIMEOUT_SECONDS
    if math.isnan(value):
        _LOGGER.warning("Ignoring non-numeric {}={!r}.", _LAUNCH_TIMEOUT_VAR, raw)
        return DEFAULT_LAUNCH_TIMEOUT_SECONDS
    if value < _MIN_LAUNCH_TIMEOUT or value > _MAX_LAUNCH_TIMEOUT:
        _LOGGER.warning(
            "Invalid launch timeout {} found in environment. Clamping to safe bounds.",
            raw,
        )
    return max(_MIN_LAUNCH_TIMEOUT, min(_MAX_LAUNCH_TIMEOUT, value))
