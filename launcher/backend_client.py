"""
Backend command boundary.

The launcher never builds indexes, crawls the filesystem or runs a model
itself. Everything goes through a handful of named commands exposed by the
host application (the same commands the desktop shell registers):

    app_search(query)      -> [(name, path[, icon])]
    search_index(query)    -> [(name, path)]
    get_app_icon(appPath)  -> base64 icon
    llms(query)            -> response text
    open_path(path)        -> None

`CommandBackend` adapts an async `invoke(command, **args)` bridge to the
`LauncherBackend` protocol the session controller consumes.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol

from .models.domain import Domain
from .models.schemas import RawResult, parse_search_rows
from .utils.logger import get_logger

logger = get_logger(__name__)

# Reserved query used to check that a domain's index exists. The backend
# builds the index lazily the first time it is searched.
PROBE_QUERY = "__test_empty__"

Invoke = Callable[..., Awaitable[Any]]

SEARCH_COMMANDS: Dict[Domain, str] = {
    Domain.APPLICATIONS: "app_search",
    Domain.FILES: "search_index",
}
ICON_COMMAND = "get_app_icon"
ASK_COMMAND = "llms"
OPEN_COMMAND = "open_path"


class BackendError(Exception):
    """Raised when a backend command fails or returns an unusable payload."""


class Assistant(Protocol):
    async def ask(self, query: str) -> str: ...


class LauncherBackend(Protocol):
    """Capabilities the session controller needs from the host."""

    async def ensure_index(self, domain: Domain) -> None: ...

    async def search(self, domain: Domain, query: str) -> List[RawResult]: ...

    async def fetch_icon(self, path: str) -> str: ...

    async def ask(self, query: str) -> str: ...

    async def open(self, path: str) -> None: ...


class CommandBackend:
    """
    Route launcher operations to host commands.

    Args:
        invoke: async callable taking the command name and keyword arguments
        assistant: optional object with `async ask(query)`; when given it
            replaces the host's `llms` command
        commands: per-domain search command table (defaults to SEARCH_COMMANDS)
    """

    def __init__(
        self,
        invoke: Invoke,
        *,
        assistant: Optional[Assistant] = None,
        commands: Optional[Dict[Domain, str]] = None,
    ):
        self._invoke = invoke
        self._assistant = assistant
        self._commands = dict(commands or SEARCH_COMMANDS)

    def _search_command(self, domain: Domain) -> str:
        try:
            return self._commands[domain]
        except KeyError:
            raise BackendError(f"No search command registered for domain '{domain.value}'") from None

    async def _call(self, command: str, **args: Any) -> Any:
        try:
            return await self._invoke(command, **args)
        except BackendError:
            raise
        except Exception as e:
            raise BackendError(f"{command} failed: {e}") from e

    async def ensure_index(self, domain: Domain) -> None:
        await self.search(domain, PROBE_QUERY)

    async def search(self, domain: Domain, query: str) -> List[RawResult]:
        command = self._search_command(domain)
        rows = await self._call(command, query=query)
        try:
            return parse_search_rows(rows)
        except ValueError as e:
            logger.warning(f"{command} returned an invalid payload: {e}")
            raise BackendError(f"{command} returned an invalid payload") from e

    async def fetch_icon(self, path: str) -> str:
        icon = await self._call(ICON_COMMAND, appPath=path)
        if not icon:
            raise BackendError(f"No icon available for {path}")
        return str(icon)

    async def ask(self, query: str) -> str:
        if self._assistant is not None:
            try:
                text = await self._assistant.ask(query)
            except Exception as e:
                raise BackendError(str(e)) from e
        else:
            text = await self._call(ASK_COMMAND, query=query)
        return "" if text is None else str(text)

    async def open(self, path: str) -> None:
        await self._call(OPEN_COMMAND, path=path)
