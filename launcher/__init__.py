"""
Launcher - keystroke-driven search over applications, files and an assistant.

The `gui` package holds the search session controller; this package holds the
process-wide pieces it leans on (settings, logging, backend boundary).
"""

__version__ = "0.3.0"

from .backend_client import BackendError, CommandBackend, LauncherBackend

__all__ = [
    "BackendError",
    "CommandBackend",
    "LauncherBackend",
]
