"""Base class for views.

Views turn `SessionState` into plain render models; no UI toolkit is
imported here, so the shell can be anything that reads them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from gui.state import SessionState


@dataclass
class BaseView:
    name: str = "base"

    def render(self, state: SessionState) -> Any:
        raise NotImplementedError
