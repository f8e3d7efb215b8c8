"""Keyboard selection that stays put while the user keeps typing."""

from __future__ import annotations

from typing import Optional


class SelectionController:
    """
    Tracks the highlighted row across result-set replacements.

    When new results arrive the index is kept only if the new query extends
    the previous one (same prefix, not shorter) and still fits the new list;
    otherwise it goes back to 0. Backspace and unrelated edits therefore
    reset the highlight while incremental typing does not.
    """

    def __init__(self) -> None:
        self.index = 0
        self.previous_query: Optional[str] = None

    def reset(self) -> None:
        self.index = 0
        self.previous_query = None

    def on_results_replaced(self, query: str, size: int) -> int:
        previous = self.previous_query
        self.previous_query = query

        if (
            previous is None
            or not query.startswith(previous)
            or len(query) < len(previous)
            or self.index >= size
        ):
            self.index = 0
        return self.index

    def move_down(self, size: int) -> int:
        if size > 0:
            self.index = (self.index + 1) % size
        return self.index

    def move_up(self, size: int) -> int:
        if size > 0:
            self.index = (self.index - 1) % size
        return self.index

    def select(self, index: int, size: int) -> int:
        if 0 <= index < size:
            self.index = index
        return self.index
