"""
Search session coordinating discovery, filtering and launching of modules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol

from core.launcher import LaunchResult, LaunchStatus, launch_command
from core.module_scanner import DescriptorScanner, ScanResult
from core.search_filter import filter_modules
from core.settings import DEFAULT_LAUNCH_TIMEOUT_SECONDS
from kcm_search import logger as app_logger
from shared.module_descriptor import ModuleDescriptor

Launcher = Callable[..., LaunchResult]


class Notifier(Protocol):
    def show(self, title: str, message: str) -> None:
        ...


class LogNotifier:
    """Notifier that writes status messages to the application log."""

    def __init__(self) -> None:
        self._logger = app_logger.get_logger()

    def show(self, title: str, message: str) -> None:
        self._logger.info("{}: {}", title, message)


@dataclass
class SearchSession:
    scanner: DescriptorScanner = field(default_factory=DescriptorScanner)
    notifier: Notifier = field(default_factory=LogNotifier)
    launcher: Optional[Launcher] = None
    close_session: Optional[Callable[[], None]] = None
    copy_to_clipboard: Optional[Callable[[str], None]] = None
    launch_timeout_seconds: float = DEFAULT_LAUNCH_TIMEOUT_SECONDS
    initial_query: str = ""

    def __post_init__(self) -> None:
        self._logger = app_logger.get_logger()
        self._modules: List[ModuleDescriptor] = []
        self._query = self.initial_query or ""
        self._scan_result: Optional[ScanResult] = None

    def start(self) -> ScanResult:
        """Scan once for this session; later calls return the first scan."""
        if self._scan_result is not None:
            self._logger.debug("Session already started; keeping the first scan.")
            return self._scan_result

        result = self.scanner.scan()
        for path, error in result.errors:
            self._logger.error("Failed to load descriptor at {}: {}", path, error)
        self._modules = list(result.modules)
        self._scan_result = result
        return result

    @property
    def modules(self) -> List[ModuleDescriptor]:
        return list(self._modules)

    @property
    def query(self) -> str:
        return self._query

    def set_query(self, text: str) -> List[ModuleDescriptor]:
        self._query = text or ""
        return self.results

    @property
    def results(self) -> List[ModuleDescriptor]:
        return filter_modules(self._modules, self._query)

    def find(self, module_id: str) -> Optional[ModuleDescriptor]:
        for module in self._modules:
            if module.id == module_id:
                return module
        return None

    def open_module(self, module: ModuleDescriptor) -> LaunchResult:
        """Launch ``module`` and report progress through the notifier."""
        try:
            self.notifier.show(f"Opening {module.name}...", "Launching KDE System Settings")
            launcher = self.launcher or launch_command
            result = launcher(module.launch_command, timeout=self.launch_timeout_seconds)
            if result.ok:
                self._logger.info("Opened module {} with {!r}", module.id, module.launch_command)
                self.notifier.show("Success", f"{module.name} opened successfully")
                if self.close_session is not None:
                    self.close_session()
                return result
        except Exception as exc:
            self._logger.exception("Unexpected failure while opening module {}", module.id)
            result = LaunchResult(
                status=LaunchStatus.PROCESS_ERROR,
                command=module.launch_command,
                detail=str(exc) or type(exc).__name__,
            )

        self._logger.error("Failed to open module {}: {}", module.id, result.reason)
        self._notify_failure(module, result)
        return result

    def _notify_failure(self, module: ModuleDescriptor, result: LaunchResult) -> None:
        try:
            self.notifier.show("Error", f"Failed to open {module.name}: {result.reason}")
        except Exception:
            self._logger.exception("Could not report launch failure for module {}", module.id)

    def copy_module_id(self, module: ModuleDescriptor) -> str:
        if self.copy_to_clipboard is not None:
            self.copy_to_clipboard(module.id)
        return module.id
