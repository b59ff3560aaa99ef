"""
kcm_search package.

Console front-end and logging for searching the KDE configuration modules
installed on this machine.
"""

__all__ = [
    "logger",
    "main",
]
