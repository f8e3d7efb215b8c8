"""Session state container.

Plain data for the search session. The controller in `gui.app` is the only
writer; render models in `gui.views` and `gui.components` only read it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple

from launcher.models.domain import Domain

__all__ = [
    "ConversationHistory",
    "ConversationTurn",
    "Domain",
    "IndexStatus",
    "Query",
    "ResultSet",
    "SearchResult",
    "SessionState",
]


class IndexStatus(str, Enum):
    NOT_CREATED = "not_created"
    CREATING = "creating"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class Query:
    """Query text bound to its domain and dispatch sequence number."""

    text: str
    domain: Domain
    seq: int


@dataclass(frozen=True)
class SearchResult:
    name: str
    path: str
    is_application: bool = False
    icon_ref: Optional[str] = None


@dataclass(frozen=True)
class ResultSet:
    """Ordered results answering one query. Replaced wholesale, never mutated."""

    query: Optional[Query] = None
    results: Tuple[SearchResult, ...] = ()

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self):
        return iter(self.results)

    def __getitem__(self, index: int) -> SearchResult:
        return self.results[index]

    @property
    def text(self) -> str:
        return self.query.text if self.query else ""

    def with_icons(self, icons: Mapping[str, str]) -> "ResultSet":
        """Return a copy with icon references filled in by path."""
        results = tuple(
            replace(r, icon_ref=icons[r.path]) if r.icon_ref is None and r.path in icons else r
            for r in self.results
        )
        return ResultSet(query=self.query, results=results)


EMPTY_RESULTS = ResultSet()


@dataclass(frozen=True)
class ConversationTurn:
    query: str
    response: str


class ConversationHistory:
    """Append-only record of assistant exchanges for the session."""

    def __init__(self) -> None:
        self._turns: List[ConversationTurn] = []

    def __len__(self) -> int:
        return len(self._turns)

    def append(self, turn: ConversationTurn) -> None:
        self._turns.append(turn)

    @property
    def turns(self) -> Tuple[ConversationTurn, ...]:
        return tuple(self._turns)

    def recent(self, window: int) -> Tuple[ConversationTurn, ...]:
        if window <= 0:
            return ()
        return tuple(self._turns[-window:])


@dataclass
class SessionState:
    """Holds ephemeral session state.

    `results` and `selected_index` are only ever assigned together through
    `set_results`, so the selection invariant holds after every update.
    """

    mode: Domain = Domain.APPLICATIONS
    query_text: str = ""
    results: ResultSet = EMPTY_RESULTS
    selected_index: int = 0
    index_status: Dict[Domain, IndexStatus] = field(
        default_factory=lambda: {d: IndexStatus.NOT_CREATED for d in Domain.indexed()}
    )
    is_loading: bool = False
    last_error: Optional[str] = None

    # Assistant mode
    response: Optional[str] = None
    assistant_pending: bool = False
    history: ConversationHistory = field(default_factory=ConversationHistory)

    def set_results(self, results: ResultSet, selected_index: int = 0) -> None:
        if not len(results) or not 0 <= selected_index < len(results):
            selected_index = 0
        self.results = results
        self.selected_index = selected_index

    def clear_results(self) -> None:
        self.set_results(EMPTY_RESULTS)

    @property
    def selected(self) -> Optional[SearchResult]:
        if not len(self.results):
            return None
        return self.results[self.selected_index]
