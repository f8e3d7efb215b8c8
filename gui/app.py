"""Search session controller.

`LauncherApp` is what the UI shell talks to. It receives raw input and key
events, drives the debouncer, index manager and dispatcher, and keeps
`SessionState` consistent: listeners only ever see states where the result
set and the selected index agree.

The controller runs entirely on the UI event loop. Backend calls are awaited
in tasks it spawns, so keystrokes keep flowing while calls are outstanding.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Set, Union

from gui.services.dispatch_service import BackendDispatcher
from gui.services.icon_service import IconService
from gui.services.index_manager import IndexManager
from gui.services.query_debouncer import QueryDebouncer
from gui.services.search_service import build_result_set
from gui.services.selection_service import SelectionController
from gui.state import (
    ConversationTurn,
    Domain,
    IndexStatus,
    ResultSet,
    SearchResult,
    SessionState,
)
from gui.utils.async_tasks import run_async
from gui.utils.logging import log
from launcher.backend_client import LauncherBackend
from launcher.config import Settings, get_settings

StateListener = Callable[[SessionState], None]


class Key(str, Enum):
    ARROW_UP = "ArrowUp"
    ARROW_DOWN = "ArrowDown"
    ENTER = "Enter"
    ESCAPE = "Escape"


class LauncherApp:
    """Owns the session: active mode, query, results, selection, assistant."""

    def __init__(
        self,
        backend: LauncherBackend,
        settings: Optional[Settings] = None,
        state: Optional[SessionState] = None,
    ):
        self.settings = settings or get_settings()
        self.state = state or SessionState()
        self.dispatcher = BackendDispatcher(
            backend,
            search_timeout=self.settings.search_timeout_s,
            index_timeout=self.settings.index_timeout_s,
            assistant_timeout=self.settings.assistant_timeout_s,
        )
        self.index_manager = IndexManager(self.dispatcher, self.state.index_status)
        self.index_manager.add_listener(lambda domain, status: self._notify())
        self.selection = SelectionController()
        self.icons = IconService(self.dispatcher, cache=self.settings.icon_cache)
        self.debouncer = QueryDebouncer(
            self.settings.debounce_seconds, self._on_debounced, self._on_blank_input
        )
        self._listeners: List[StateListener] = []
        self._tasks: Set[asyncio.Future] = set()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> Dict[Domain, IndexStatus]:
        """Detect which indexes already exist (when probing is enabled)."""
        if self.settings.probe_on_start:
            await asyncio.gather(
                *(self.index_manager.ensure_ready(d) for d in Domain.indexed())
            )
        return self.index_manager.statuses()

    async def wait_idle(self) -> None:
        """Wait until every task spawned by the controller has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def shutdown(self) -> None:
        self.debouncer.cancel()
        self.dispatcher.invalidate()
        for task in list(self._tasks):
            task.cancel()
        await self.index_manager.shutdown()
        await self.dispatcher.shutdown()
        await self.wait_idle()

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # UI events
    # ------------------------------------------------------------------

    def on_input(self, text: str) -> None:
        self.state.query_text = text
        self.debouncer.submit(text, self.state.mode)
        self._notify()

    def on_key(self, key: Union[Key, str]) -> Optional[asyncio.Future]:
        """Handle a navigation key. Enter returns the task it started, if any."""
        try:
            key = Key(key)
        except ValueError:
            return None

        if key is Key.ARROW_DOWN:
            self._navigate(self.selection.move_down)
        elif key is Key.ARROW_UP:
            self._navigate(self.selection.move_up)
        elif key is Key.ENTER:
            return self.activate()
        elif key is Key.ESCAPE:
            self.clear()
        return None

    def hover(self, index: int) -> None:
        if self.state.mode is Domain.ASSISTANT:
            return
        self._navigate(lambda size: self.selection.select(index, size))

    def activate(self) -> Optional[asyncio.Future]:
        """Enter: open the selected item, or ask the assistant."""
        if self.state.mode is Domain.ASSISTANT:
            text = self.state.query_text.strip()
            if not text:
                return None
            return self._spawn(self._ask, text)

        item = self.state.selected
        if item is None:
            return None
        return self._spawn(self._open, item)

    def clear(self) -> None:
        """Escape: drop query, results and any assistant answer or pending ask."""
        self._reset_session()
        self._notify()

    def switch_mode(self, mode: Union[Domain, str]) -> None:
        mode = Domain(mode)
        if mode is self.state.mode:
            return
        self.state.mode = mode
        self._reset_session()
        log(f"Switched to {mode.label} mode")
        self._notify()

    # ------------------------------------------------------------------
    # Query flow
    # ------------------------------------------------------------------

    def _on_debounced(self, text: str, domain: Domain) -> None:
        if domain is not self.state.mode:
            return
        if domain is Domain.ASSISTANT:
            if self.settings.assistant_ask_on_type:
                self._spawn(self._ask, text.strip())
            return
        self._spawn(self._search, text, domain)

    def _on_blank_input(self) -> None:
        if self.state.mode.is_indexed:
            self.dispatcher.invalidate(self.state.mode)
        self.selection.reset()
        self.state.clear_results()
        self.state.is_loading = False
        self.state.last_error = None
        self.state.response = None

    async def _search(self, text: str, domain: Domain) -> None:
        # Numbered before waiting on the index so ordering follows keystrokes.
        query = self.dispatcher.issue(domain, text)
        self.state.is_loading = True
        self._notify()

        ready = await self.index_manager.ensure_ready(domain)
        if not self.dispatcher.is_current(query):
            return
        if not ready:
            message = self.index_manager.last_error(domain) or "index unavailable"
            self._search_failed(f"{domain.label} index unavailable: {message}")
            return

        outcome = await self.dispatcher.dispatch(query)
        if outcome is None or domain is not self.state.mode:
            return
        if not outcome.ok:
            self._search_failed(outcome.message)
            return

        result_set = build_result_set(outcome.value, domain, query)
        self._publish(result_set)
        if self.settings.fetch_icons:
            await self._load_icons(result_set)

    def _publish(self, result_set: ResultSet) -> None:
        index = self.selection.on_results_replaced(result_set.text, len(result_set))
        self.state.set_results(result_set, index)
        self.state.is_loading = False
        self.state.last_error = None
        self._notify()

    def _search_failed(self, message: str) -> None:
        self.selection.reset()
        self.state.clear_results()
        self.state.is_loading = False
        self.state.last_error = message
        self._notify()

    async def _load_icons(self, result_set: ResultSet) -> None:
        icons = await self.icons.fetch_missing(result_set)
        if not icons or self.state.results is not result_set:
            return
        self.state.set_results(result_set.with_icons(icons), self.state.selected_index)
        self._notify()

    async def _ask(self, text: str) -> None:
        query = self.dispatcher.issue(Domain.ASSISTANT, text)
        self.state.assistant_pending = True
        self._notify()

        outcome = await self.dispatcher.dispatch(query)
        if outcome is None:
            return
        self.state.assistant_pending = False
        if outcome.ok:
            self.state.response = outcome.value
            self.state.history.append(ConversationTurn(query=text, response=outcome.value))
        else:
            self.state.response = f"Error: {outcome.message}"
        self._notify()

    async def _open(self, item: SearchResult) -> None:
        outcome = await self.dispatcher.open(item.path)
        if not outcome.ok:
            log(f"Failed to open {item.path}: {outcome.message}", logging.ERROR)
            return
        self._reset_session()
        self._notify()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _navigate(self, move: Callable[[int], int]) -> None:
        size = len(self.state.results)
        if self.state.mode is Domain.ASSISTANT or not size:
            return
        self.state.set_results(self.state.results, move(size))
        self._notify()

    def _reset_session(self) -> None:
        self.debouncer.cancel()
        self.dispatcher.invalidate()
        self.selection.reset()
        self.state.query_text = ""
        self.state.clear_results()
        self.state.is_loading = False
        self.state.last_error = None
        self.state.response = None
        self.state.assistant_pending = False

    def _spawn(self, fn: Callable[..., Any], *args: Any) -> asyncio.Future:
        task = run_async(fn, *args)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)
