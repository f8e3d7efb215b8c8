"""
Index lifecycle manager for the launcher.

Tracks one readiness status per indexed domain:

    NOT_CREATED -> CREATING -> READY
                            -> ERROR -> CREATING (retry on demand)

`ensure_ready` is the only way a status changes. It is single-flight: while a
domain is CREATING every caller attaches to the same in-flight attempt, and a
build that outlived its timeout is awaited again by the next retry instead of
being started a second time. The backend's index build therefore never runs
twice at once for a domain. The check-and-set happens synchronously, with no
await in between, which is all the protection needed on a single-threaded
event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Dict, List, Optional

from gui.services.dispatch_service import BackendDispatcher, DispatchOutcome
from gui.state import Domain, IndexStatus

logger = logging.getLogger(__name__)

StatusListener = Callable[[Domain, IndexStatus], None]


class IndexManager:
    """
    Per-domain readiness state machine.

    Args:
        dispatcher: issues the backend creation/probe call
        statuses: mapping to mutate in place (the session's status map);
            a fresh NOT_CREATED map is used when omitted
    """

    def __init__(
        self,
        dispatcher: BackendDispatcher,
        statuses: Optional[Dict[Domain, IndexStatus]] = None,
    ):
        self._dispatcher = dispatcher
        self._statuses = statuses if statuses is not None else {}
        for domain in Domain.indexed():
            self._statuses.setdefault(domain, IndexStatus.NOT_CREATED)
        self._inflight: Dict[Domain, asyncio.Future] = {}
        # Backend builds still running after their attempt timed out
        self._backend_calls: Dict[Domain, asyncio.Future] = {}
        self._errors: Dict[Domain, str] = {}
        self._listeners: List[StatusListener] = []

    def status(self, domain: Domain) -> IndexStatus:
        return self._statuses[domain]

    def statuses(self) -> Dict[Domain, IndexStatus]:
        return dict(self._statuses)

    def last_error(self, domain: Domain) -> Optional[str]:
        return self._errors.get(domain)

    def add_listener(self, listener: StatusListener) -> None:
        self._listeners.append(listener)

    async def ensure_ready(self, domain: Domain) -> bool:
        """Make sure `domain`'s index exists. Safe to call repeatedly.

        Returns True when the index is ready, False when creation failed.
        """
        if not domain.is_indexed:
            raise ValueError(f"Domain '{domain.value}' has no index")

        if self._statuses[domain] is IndexStatus.READY:
            return True

        attempt = self._inflight.get(domain)
        if attempt is None:
            # NOT_CREATED or ERROR: start exactly one attempt
            self._set_status(domain, IndexStatus.CREATING)
            attempt = asyncio.ensure_future(self._create(domain))
            self._inflight[domain] = attempt

        # shield: a cancelled waiter must not cancel the shared attempt
        return await asyncio.shield(attempt)

    async def shutdown(self) -> None:
        """Cancel in-flight attempts and any build left running by a timeout."""
        domains = list(self._inflight)
        attempts = list(self._inflight.values()) + list(self._backend_calls.values())
        self._backend_calls.clear()
        for attempt in attempts:
            attempt.cancel()
        await asyncio.gather(*attempts, return_exceptions=True)

        # an attempt cancelled before it started never reached its own handler
        self._inflight.clear()
        for domain in domains:
            if self._statuses[domain] is IndexStatus.CREATING:
                self._errors[domain] = "cancelled"
                self._set_status(domain, IndexStatus.ERROR)

    async def _create(self, domain: Domain) -> bool:
        try:
            outcome = await self._build(domain)
        except asyncio.CancelledError:
            self._errors[domain] = "cancelled"
            self._set_status(domain, IndexStatus.ERROR)
            raise
        finally:
            self._inflight.pop(domain, None)

        if outcome.ok:
            self._errors.pop(domain, None)
            self._set_status(domain, IndexStatus.READY)
            return True

        self._errors[domain] = outcome.message
        logger.error(f"Index creation failed for {domain.value}: {outcome.message}")
        self._set_status(domain, IndexStatus.ERROR)
        return False

    async def _build(self, domain: Domain) -> DispatchOutcome:
        pending = self._backend_calls.pop(domain, None)
        if pending is not None and pending.done() and (pending.cancelled() or pending.exception()):
            pending = None

        outcome = await self._dispatcher.ensure_index(domain, pending=pending)
        if pending is not None and not outcome.ok and outcome.pending is None:
            # the earlier build finished with a failure; start a fresh one
            outcome = await self._dispatcher.ensure_index(domain)
        if outcome.pending is not None:
            self._backend_calls[domain] = outcome.pending
        return outcome

    def _set_status(self, domain: Domain, status: IndexStatus) -> None:
        previous = self._statuses.get(domain)
        self._statuses[domain] = status
        if previous is not status:
            logger.info(f"Index {domain.value}: {previous.value if previous else '-'} -> {status.value}")
        for listener in list(self._listeners):
            listener(domain, status)
