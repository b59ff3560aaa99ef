"""
Core helpers for KCM Search: discovery, filtering and launching.
"""

from .launcher import LaunchResult, LaunchStatus, launch_command  # noqa: F401
from .module_scanner import DescriptorScanner, ScanResult, scan_modules  # noqa: F401
from .search_filter import filter_modules  # noqa: F401
