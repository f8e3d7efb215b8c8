"""Status bar text: per-domain index badges, hints and help line.

Render-only; reads `SessionState` and never mutates it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional

from gui.state import Domain, IndexStatus, SessionState

HELP_TEXT = "Type to search • ↑↓ to navigate • Enter to open • Esc to clear"

STATUS_LABELS = {
    IndexStatus.NOT_CREATED: "Not Created",
    IndexStatus.CREATING: "Creating...",
    IndexStatus.READY: "Ready",
    IndexStatus.ERROR: "Error",
}

STATUS_STYLES = {
    IndexStatus.NOT_CREATED: "not-created",
    IndexStatus.CREATING: "indexing",
    IndexStatus.READY: "ready",
    IndexStatus.ERROR: "error",
}

_INDEX_NOUN = {Domain.APPLICATIONS: "App", Domain.FILES: "File"}


@dataclass(frozen=True)
class StatusBadge:
    domain: Domain
    label: str
    style: str

    @property
    def text(self) -> str:
        return f"{self.domain.label}: {self.label}"


def build_badges(statuses: Mapping[Domain, IndexStatus]) -> List[StatusBadge]:
    return [
        StatusBadge(domain=d, label=STATUS_LABELS[statuses[d]], style=STATUS_STYLES[statuses[d]])
        for d in Domain.indexed()
        if d in statuses
    ]


def index_hint(state: SessionState) -> Optional[str]:
    """Hint shown under an empty result list while the index is missing."""
    mode = state.mode
    if not mode.is_indexed:
        return None
    if state.index_status.get(mode) not in (IndexStatus.NOT_CREATED, IndexStatus.ERROR):
        return None
    return f"{_INDEX_NOUN[mode]} index will be created automatically on first search"


def placeholder(state: SessionState) -> str:
    mode = state.mode
    if mode is Domain.ASSISTANT:
        return "Ask the assistant..."
    if state.index_status.get(mode) is IndexStatus.CREATING:
        return f"Creating {_INDEX_NOUN[mode].lower()} index..."
    if mode is Domain.APPLICATIONS:
        return "Search applications..."
    return "Search files..."


def mode_indicator(state: SessionState, domain: Domain) -> str:
    """Mode-selector suffix: a bolt while that domain's index is building."""
    if domain.is_indexed and state.index_status.get(domain) is IndexStatus.CREATING:
        return "⚡"
    return ""
