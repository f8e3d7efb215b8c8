"""Search result helpers for the GUI.

Turns raw backend rows into typed results and orders them for display. The
backend already ranks by relevance; the only reordering done here is lifting
application bundles/installers to the top of file results.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from gui.state import Domain, Query, ResultSet, SearchResult
from launcher.models.schemas import RawResult

APPLICATION_SUFFIXES = (".app", ".exe", ".dmg", ".pkg")


def is_application(name: str, domain: Domain) -> bool:
    if domain is Domain.APPLICATIONS:
        return True
    return name.lower().endswith(APPLICATION_SUFFIXES)


def normalize(raw_results: Iterable[RawResult], domain: Domain) -> List[SearchResult]:
    return [
        SearchResult(
            name=raw.name,
            path=raw.path,
            is_application=is_application(raw.name, domain),
            icon_ref=raw.icon_ref,
        )
        for raw in raw_results
    ]


def rank(results: Sequence[SearchResult], domain: Domain) -> List[SearchResult]:
    """Order results for display.

    Applications keep backend order. Files get a stable two-way partition:
    applications first, everything else after, each group in backend order.
    """
    if domain is Domain.APPLICATIONS:
        return list(results)
    apps = [r for r in results if r.is_application]
    others = [r for r in results if not r.is_application]
    return apps + others


def build_result_set(
    raw_results: Iterable[RawResult], domain: Domain, query: Optional[Query] = None
) -> ResultSet:
    ranked = rank(normalize(raw_results, domain), domain)
    return ResultSet(query=query, results=tuple(ranked))
