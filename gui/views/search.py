"""Search view (applications and files modes)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from gui.components.result_list import ResultRow, build_rows
from gui.components.status_bar import (
    HELP_TEXT,
    StatusBadge,
    build_badges,
    index_hint,
    placeholder,
)
from gui.state import SessionState
from gui.views.base import BaseView


@dataclass(frozen=True)
class SearchViewModel:
    placeholder: str
    query: str
    loading: bool
    rows: List[ResultRow] = field(default_factory=list)
    empty_message: Optional[str] = None
    hint: Optional[str] = None
    error: Optional[str] = None
    badges: List[StatusBadge] = field(default_factory=list)
    help_text: str = HELP_TEXT


@dataclass
class SearchView(BaseView):
    name: str = "search"

    def render(self, state: SessionState) -> SearchViewModel:
        rows = build_rows(state.results, state.selected_index)
        empty_message = None
        hint = None
        if state.query_text and not state.is_loading and not rows:
            empty_message = f'No results found for "{state.query_text}"'
            hint = index_hint(state)
        return SearchViewModel(
            placeholder=placeholder(state),
            query=state.query_text,
            loading=state.is_loading and bool(state.query_text),
            rows=rows,
            empty_message=empty_message,
            hint=hint,
            error=state.last_error,
            badges=build_badges(state.index_status),
        )
