"""Application icon loading.

Icons are fetched after a result set is already on screen, so a slow icon
extractor never delays results. A failed fetch is not an error for the
session: the row just renders the generic glyph for its kind.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterable, Optional

from gui.services.dispatch_service import BackendDispatcher
from gui.state import SearchResult

logger = logging.getLogger(__name__)


class IconService:
    """Fetch icons for application results.

    Args:
        dispatcher: backend dispatcher used for `fetch_icon`
        cache: remember per-path outcomes (hits and misses) for the session
    """

    def __init__(self, dispatcher: BackendDispatcher, *, cache: bool = False):
        self._dispatcher = dispatcher
        self._cache: Optional[Dict[str, Optional[str]]] = {} if cache else None

    def clear_cache(self) -> None:
        if self._cache is not None:
            self._cache.clear()

    async def fetch(self, path: str) -> Optional[str]:
        if self._cache is not None and path in self._cache:
            return self._cache[path]

        outcome = await self._dispatcher.fetch_icon(path)
        icon = outcome.value if outcome.ok else None
        if not outcome.ok:
            logger.debug(f"No icon for {path}: {outcome.message}")

        if self._cache is not None:
            self._cache[path] = icon
        return icon

    async def fetch_missing(self, results: Iterable[SearchResult]) -> Dict[str, str]:
        """Fetch icons for applications without one. Returns {path: icon}."""
        paths = list(dict.fromkeys(r.path for r in results if r.is_application and r.icon_ref is None))
        if not paths:
            return {}
        icons = await asyncio.gather(*(self.fetch(p) for p in paths))
        return {path: icon for path, icon in zip(paths, icons) if icon}
