"""
Backend dispatcher for the search session.

Every search/ask request is tagged with a per-domain sequence number at issue
time. When a response comes back its number is compared with the latest one
issued for that domain, and anything older is dropped: responses can arrive
out of order, but the session only ever shows the newest request's answer.

In-flight calls are never cancelled. A superseded call simply runs to
completion and its outcome is discarded; a call that exceeds its timeout is
reported as a failure while the underlying request is left alone.

All backend exceptions stop here and come back as a `DispatchOutcome`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, Set

from gui.state import Domain, Query
from launcher.backend_client import LauncherBackend

logger = logging.getLogger(__name__)


class FailureKind(str, Enum):
    """Failure taxonomy; each kind maps to one local state transition."""

    INDEX_CREATION = "index_creation"
    SEARCH = "search"
    ASSISTANT = "assistant"
    ICON_FETCH = "icon_fetch"
    OPEN = "open"


@dataclass(frozen=True)
class DispatchOutcome:
    ok: bool
    value: Any = None
    failure: Optional[FailureKind] = None
    message: str = ""
    query: Optional[Query] = None
    # Backend call still running after a timeout
    pending: Optional[asyncio.Future] = field(default=None, compare=False, repr=False)

    @classmethod
    def success(cls, value: Any, query: Optional[Query] = None) -> "DispatchOutcome":
        return cls(ok=True, value=value, query=query)

    @classmethod
    def error(
        cls,
        failure: FailureKind,
        message: str,
        query: Optional[Query] = None,
        pending: Optional[asyncio.Future] = None,
    ) -> "DispatchOutcome":
        return cls(ok=False, failure=failure, message=message, query=query, pending=pending)


@dataclass(frozen=True)
class _Route:
    call: Callable[[Query], Awaitable[Any]]
    failure: FailureKind
    timeout: float


class BackendDispatcher:
    """
    Uniform call/response wrapper over a `LauncherBackend`.

    Args:
        backend: the command boundary implementation
        search_timeout: seconds for search, icon and open calls (0 disables)
        index_timeout: seconds for index creation/probe calls
        assistant_timeout: seconds for assistant calls
    """

    def __init__(
        self,
        backend: LauncherBackend,
        *,
        search_timeout: float = 10.0,
        index_timeout: float = 600.0,
        assistant_timeout: float = 120.0,
    ):
        self._backend = backend
        self.search_timeout = search_timeout
        self.index_timeout = index_timeout
        self.assistant_timeout = assistant_timeout
        self._latest: Dict[Domain, int] = {d: 0 for d in Domain}
        self._calls: Set[asyncio.Future] = set()

        search = _Route(
            call=lambda q: self._backend.search(q.domain, q.text),
            failure=FailureKind.SEARCH,
            timeout=search_timeout,
        )
        self._routes: Dict[Domain, _Route] = {
            Domain.APPLICATIONS: search,
            Domain.FILES: search,
            Domain.ASSISTANT: _Route(
                call=lambda q: self._backend.ask(q.text),
                failure=FailureKind.ASSISTANT,
                timeout=assistant_timeout,
            ),
        }

    # ------------------------------------------------------------------
    # Sequence numbers
    # ------------------------------------------------------------------

    def issue(self, domain: Domain, text: str) -> Query:
        """Tag `text` with the next sequence number for `domain`."""
        self._latest[domain] += 1
        return Query(text=text, domain=domain, seq=self._latest[domain])

    def latest(self, domain: Domain) -> int:
        return self._latest[domain]

    def is_current(self, query: Query) -> bool:
        return query.seq == self._latest[query.domain]

    def invalidate(self, *domains: Domain) -> None:
        """Supersede everything in flight for `domains` (all when empty)."""
        for domain in domains or tuple(Domain):
            self._latest[domain] += 1

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def dispatch(self, query: Query) -> Optional[DispatchOutcome]:
        """Run an issued query. Returns None when the response is stale."""
        route = self._routes.get(query.domain)
        if route is None:
            return DispatchOutcome.error(
                FailureKind.SEARCH, f"No route for domain '{query.domain.value}'", query
            )
        outcome = await self._guarded(route.failure, route.call(query), route.timeout, query)
        if not self.is_current(query):
            logger.debug(
                f"Discarding stale {query.domain.value} response #{query.seq} "
                f"(latest #{self._latest[query.domain]})"
            )
            return None
        return outcome

    async def search(self, domain: Domain, text: str) -> Optional[DispatchOutcome]:
        return await self.dispatch(self.issue(domain, text))

    async def ask(self, text: str) -> Optional[DispatchOutcome]:
        return await self.dispatch(self.issue(Domain.ASSISTANT, text))

    async def ensure_index(
        self, domain: Domain, *, pending: Optional[asyncio.Future] = None
    ) -> DispatchOutcome:
        """Create or probe `domain`'s index.

        `pending` is a call left running by an earlier timeout; when given it
        is awaited again instead of starting a second backend build.
        """
        awaitable = pending if pending is not None else self._backend.ensure_index(domain)
        return await self._guarded(FailureKind.INDEX_CREATION, awaitable, self.index_timeout)

    async def fetch_icon(self, path: str) -> DispatchOutcome:
        return await self._guarded(
            FailureKind.ICON_FETCH, self._backend.fetch_icon(path), self.search_timeout
        )

    async def open(self, path: str) -> DispatchOutcome:
        return await self._guarded(FailureKind.OPEN, self._backend.open(path), self.search_timeout)

    async def _guarded(
        self,
        failure: FailureKind,
        awaitable: Awaitable[Any],
        timeout: float,
        query: Optional[Query] = None,
    ) -> DispatchOutcome:
        call = asyncio.ensure_future(awaitable)
        self._calls.add(call)
        call.add_done_callback(self._calls.discard)
        try:
            if timeout and timeout > 0:
                # shield: a timed-out request keeps running, only its result is dropped
                value = await asyncio.wait_for(asyncio.shield(call), timeout)
            else:
                value = await call
        except asyncio.TimeoutError:
            call.add_done_callback(_consume_result)
            message = f"timed out after {timeout:g}s"
            logger.warning(f"{failure.value} call {message}")
            return DispatchOutcome.error(failure, message, query, pending=call)
        except Exception as e:
            logger.warning(f"{failure.value} call failed: {e}")
            return DispatchOutcome.error(failure, str(e) or e.__class__.__name__, query)
        return DispatchOutcome.success(value, query)

    async def shutdown(self) -> None:
        """Cancel every backend call still running, timed-out ones included."""
        calls = list(self._calls)
        for call in calls:
            call.cancel()
        await asyncio.gather(*calls, return_exceptions=True)


def _consume_result(task: asyncio.Future) -> None:
    if not task.cancelled() and task.exception() is not None:
        logger.debug(f"Late failure after timeout: {task.exception()!r}")
