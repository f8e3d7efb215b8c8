"""Collapse rapid keystrokes into a single dispatch."""

from __future__ import annotations

from typing import Any, Callable

from gui.state import Domain
from gui.utils.async_tasks import Debouncer


class QueryDebouncer:
    """
    Debounce query text per keystroke.

    Non-blank text (re)arms the quiescence timer; when it expires
    `on_dispatch(text, domain)` runs once for the latest text. Blank text
    cancels any pending timer and calls `on_clear()` synchronously.
    """

    def __init__(
        self,
        delay: float,
        on_dispatch: Callable[[str, Domain], Any],
        on_clear: Callable[[], Any],
    ):
        self._timer = Debouncer(delay, on_dispatch)
        self._on_clear = on_clear

    @property
    def delay(self) -> float:
        return self._timer.delay

    @property
    def pending(self) -> bool:
        return self._timer.pending

    def submit(self, text: str, domain: Domain) -> None:
        if not text or not text.strip():
            self._timer.cancel()
            self._on_clear()
            return
        self._timer.submit(text, domain)

    def cancel(self) -> None:
        self._timer.cancel()
