"""Shared fixtures: a scriptable in-memory backend and fast settings."""

import asyncio
import os
import sys
from collections import defaultdict
from typing import Dict, List, Optional, Set, Tuple

import pytest

# Ensure project root is on path
ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from launcher.backend_client import BackendError  # noqa: E402
from launcher.config import Settings  # noqa: E402
from launcher.models.domain import Domain  # noqa: E402
from launcher.models.schemas import RawResult  # noqa: E402

DEBOUNCE_MS = 10
SETTLE_S = 0.05


class FakeBackend:
    """Backend double whose calls can be held open with asyncio events."""

    def __init__(self, results: Optional[Dict[str, list]] = None):
        self.results: Dict[str, list] = dict(results or {})
        self.icons: Dict[str, str] = {}

        self.index_calls: List[Domain] = []
        self.search_calls: List[Tuple[Domain, str]] = []
        self.icon_calls: List[str] = []
        self.ask_calls: List[str] = []
        self.open_calls: List[str] = []

        self.index_gates: Dict[Domain, asyncio.Event] = {}
        self.search_gates: Dict[str, asyncio.Event] = {}
        self.ask_gates: Dict[str, asyncio.Event] = {}

        self.failing_indexes: Set[Domain] = set()
        self.failing_searches: Set[str] = set()
        self.failing_opens: Set[str] = set()
        self.ask_error: Optional[str] = None
        self.calls_in_flight: Dict[Domain, int] = defaultdict(int)
        self.max_index_in_flight: Dict[Domain, int] = defaultdict(int)

    def hold_search(self, query: str) -> asyncio.Event:
        gate = asyncio.Event()
        self.search_gates[query] = gate
        return gate

    def hold_index(self, domain: Domain) -> asyncio.Event:
        gate = asyncio.Event()
        self.index_gates[domain] = gate
        return gate

    def hold_ask(self, query: str) -> asyncio.Event:
        gate = asyncio.Event()
        self.ask_gates[query] = gate
        return gate

    async def ensure_index(self, domain: Domain) -> None:
        self.index_calls.append(domain)
        self.calls_in_flight[domain] += 1
        self.max_index_in_flight[domain] = max(
            self.max_index_in_flight[domain], self.calls_in_flight[domain]
        )
        try:
            gate = self.index_gates.get(domain)
            if gate is not None:
                await gate.wait()
            if domain in self.failing_indexes:
                raise BackendError(f"cannot build {domain.value} index")
        finally:
            self.calls_in_flight[domain] -= 1

    async def search(self, domain: Domain, query: str) -> List[RawResult]:
        self.search_calls.append((domain, query))
        gate = self.search_gates.get(query)
        if gate is not None:
            await gate.wait()
        if query in self.failing_searches:
            raise BackendError(f"search failed for {query}")
        return [RawResult.from_row(row) for row in self.results.get(query, [])]

    async def fetch_icon(self, path: str) -> str:
        self.icon_calls.append(path)
        if path not in self.icons:
            raise BackendError(f"no icon for {path}")
        return self.icons[path]

    async def ask(self, query: str) -> str:
        self.ask_calls.append(query)
        gate = self.ask_gates.get(query)
        if gate is not None:
            await gate.wait()
        if self.ask_error:
            raise BackendError(self.ask_error)
        return f"answer to {query}"

    async def open(self, path: str) -> None:
        self.open_calls.append(path)
        if path in self.failing_opens:
            raise BackendError(f"cannot open {path}")


def rows(*names: str) -> list:
    return [(name, f"/tmp/{name}") for name in names]


async def settle(app=None) -> None:
    """Let the debounce window pass and spawned work finish."""
    await asyncio.sleep(SETTLE_S)
    if app is not None:
        await app.wait_idle()


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        debounce_ms=DEBOUNCE_MS,
        search_timeout_s=2.0,
        index_timeout_s=2.0,
        assistant_timeout_s=2.0,
        history_window=3,
        fetch_icons=False,
        icon_cache=False,
        probe_on_start=False,
        assistant_ask_on_type=False,
        assistant_provider="backend",
    )
