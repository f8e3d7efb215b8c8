"""Search session controller for the launcher.

Everything here is toolkit-free: the controller in `gui.app` drives plain
state, and `gui.views` turns that state into render models a desktop shell
(or a test) can read.
"""

from .app import Key, LauncherApp
from .state import Domain, IndexStatus, SessionState

__all__ = [
    "Domain",
    "IndexStatus",
    "Key",
    "LauncherApp",
    "SessionState",
]
