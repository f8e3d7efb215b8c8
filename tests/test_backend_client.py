"""Tests for launcher/backend_client.py."""

from unittest.mock import AsyncMock

import pytest

from launcher.backend_client import PROBE_QUERY, BackendError, CommandBackend
from launcher.models.domain import Domain


class TestCommandRouting:
    @pytest.mark.asyncio
    async def test_search_uses_domain_command_table(self):
        invoke = AsyncMock(return_value=[("Mail", "/Applications/Mail.app")])
        backend = CommandBackend(invoke)

        apps = await backend.search(Domain.APPLICATIONS, "ma")
        await backend.search(Domain.FILES, "doc")

        assert [r.name for r in apps] == ["Mail"]
        assert invoke.await_args_list[0].args == ("app_search",)
        assert invoke.await_args_list[0].kwargs == {"query": "ma"}
        assert invoke.await_args_list[1].args == ("search_index",)

    @pytest.mark.asyncio
    async def test_ensure_index_probes_with_reserved_query(self):
        invoke = AsyncMock(return_value=[])
        backend = CommandBackend(invoke)

        await backend.ensure_index(Domain.FILES)

        invoke.assert_awaited_once_with("search_index", query=PROBE_QUERY)

    @pytest.mark.asyncio
    async def test_icon_open_and_ask_commands(self):
        invoke = AsyncMock(side_effect=["aWNvbg==", None, "hi there"])
        backend = CommandBackend(invoke)

        assert await backend.fetch_icon("/Applications/Mail.app") == "aWNvbg=="
        await backend.open("/tmp/a.txt")
        assert await backend.ask("hello") == "hi there"

        calls = [(c.args, c.kwargs) for c in invoke.await_args_list]
        assert calls == [
            (("get_app_icon",), {"appPath": "/Applications/Mail.app"}),
            (("open_path",), {"path": "/tmp/a.txt"}),
            (("llms",), {"query": "hello"}),
        ]

    @pytest.mark.asyncio
    async def test_assistant_object_replaces_llms_command(self):
        invoke = AsyncMock()
        assistant = AsyncMock()
        assistant.ask.return_value = "from assistant"
        backend = CommandBackend(invoke, assistant=assistant)

        assert await backend.ask("q") == "from assistant"
        invoke.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_assistant_domain_has_no_search_command(self):
        backend = CommandBackend(AsyncMock())

        with pytest.raises(BackendError):
            await backend.search(Domain.ASSISTANT, "q")


class TestErrors:
    @pytest.mark.asyncio
    async def test_invoke_exception_becomes_backend_error(self):
        backend = CommandBackend(AsyncMock(side_effect=RuntimeError("index locked")))

        with pytest.raises(BackendError, match="index locked"):
            await backend.search(Domain.FILES, "doc")

    @pytest.mark.asyncio
    async def test_invalid_payload_becomes_backend_error(self):
        backend = CommandBackend(AsyncMock(return_value=[("", "/x")]))

        with pytest.raises(BackendError, match="invalid payload"):
            await backend.search(Domain.FILES, "doc")

    @pytest.mark.asyncio
    async def test_missing_icon_is_an_error(self):
        backend = CommandBackend(AsyncMock(return_value=None))

        with pytest.raises(BackendError):
            await backend.fetch_icon("/Applications/Mail.app")

    @pytest.mark.asyncio
    async def test_assistant_failure_is_backend_error(self):
        assistant = AsyncMock()
        assistant.ask.side_effect = RuntimeError("OPENAI_API_KEY is required for the assistant.")
        backend = CommandBackend(AsyncMock(), assistant=assistant)

        with pytest.raises(BackendError, match="OPENAI_API_KEY"):
            await backend.ask("q")
