"""
External process launching for configuration modules.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from core.settings import DEFAULT_LAUNCH_TIMEOUT_SECONDS
from kcm_search import logger as app_logger

_LOGGER = app_logger.get_logger()

Runner = Callable[..., subprocess.CompletedProcess]


class LaunchStatus(Enum):
    SUCCESS = "Success"
    TIMEOUT = "Timeout"
    NON_ZERO_EXIT = "NonZeroExit"
    PROCESS_ERROR = "ProcessError"


@dataclass(frozen=True)
class LaunchResult:
    status: LaunchStatus
    command: str
    return_code: Optional[int] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status is LaunchStatus.SUCCESS

    @property
    def reason(self) -> str:
        """Human-readable explanation of a failed launch."""
        if self.status is LaunchStatus.SUCCESS:
            return ""
        if self.status is LaunchStatus.TIMEOUT:
            return f"Command timed out: {self.command}"
        if self.status is LaunchStatus.NON_ZERO_EXIT:
            message = f"Command failed with exit code {self.return_code}: {self.command}"
            if self.detail:
                message = f"{message}\n{self.detail}"
            return message
        return self.detail or f"Unable to start command: {self.command}"


def launch_command(
    command: str,
    *,
    timeout: float = DEFAULT_LAUNCH_TIMEOUT_SECONDS,
    runner: Runner = subprocess.run,
) -> LaunchResult:
    """
    Run ``command`` through the shell and wait for it, at most ``timeout`` seconds.

    Process failures are returned as a LaunchResult rather than raised.
    """
    if not command or not command.strip():
        return LaunchResult(status=LaunchStatus.PROCESS_ERROR, command=command, detail="No command to run.")

    _LOGGER.debug("Launching {!r} (timeout={}s)", command, timeout)
    try:
        completed = runner(
            command,
            shell=True,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        _LOGGER.error("Command {!r} exceeded {}s timeout.", command, timeout)
        return LaunchResult(status=LaunchStatus.TIMEOUT, command=command)
    except (OSError, ValueError, subprocess.SubprocessError) as exc:
        _LOGGER.error("Command {!r} could not be started: {}", command, exc)
        return LaunchResult(status=LaunchStatus.PROCESS_ERROR, command=command, detail=str(exc))

    if completed.returncode != 0:
        stderr = (completed.stderr or "").strip()
        _LOGGER.error("Command {!r} exited with code {}.", command, completed.returncode)
        return LaunchResult(
            status=LaunchStatus.NON_ZERO_EXIT,
            command=command,
            return_code=completed.returncode,
            detail=stderr[-200:],
        )

    return LaunchResult(status=LaunchStatus.SUCCESS, command=command, return_code=completed.returncode)
