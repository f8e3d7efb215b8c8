"""
Smoke tests for GUI services and configuration.
These tests verify basic functionality without requiring external API connections.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from launcher.backend_client import CommandBackend
from launcher.config import Settings


# ===========================================================================
# Import Tests
# ===========================================================================


class TestImports:
    """The public service surface imports cleanly."""

    def test_services_package_exports(self):
        from gui import services

        for name in services.__all__:
            assert getattr(services, name) is not None

    def test_gui_package_exports(self):
        from gui import IndexStatus, Key, LauncherApp, SessionState

        assert LauncherApp is not None
        assert Key.ENTER.value == "Enter"
        assert IndexStatus.READY.value == "ready"
        assert SessionState().mode.value == "apps"

    def test_settings_service_is_part_of_package(self):
        from gui import services

        assert callable(services.settings_service.save_settings)


# ===========================================================================
# Settings Tests
# ===========================================================================


class TestSettings:
    """Tests for launcher/config.py."""

    def test_defaults(self, monkeypatch):
        for name in ("LAUNCHER_DEBOUNCE_MS", "LAUNCHER_FETCH_ICONS", "LAUNCHER_ASSISTANT_PROVIDER"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.debounce_ms == 300
        assert settings.debounce_seconds == pytest.approx(0.3)
        assert settings.fetch_icons is True
        assert settings.assistant_provider == "backend"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("LAUNCHER_DEBOUNCE_MS", "120")
        monkeypatch.setenv("LAUNCHER_SEARCH_TIMEOUT_S", "0")
        monkeypatch.setenv("LAUNCHER_FETCH_ICONS", "off")
        monkeypatch.setenv("LAUNCHER_ICON_CACHE", "Yes")

        settings = Settings()

        assert settings.debounce_seconds == pytest.approx(0.12)
        assert settings.search_timeout_s == 0
        assert settings.fetch_icons is False
        assert settings.icon_cache is True

    def test_negative_debounce_is_zero(self, monkeypatch):
        monkeypatch.setenv("LAUNCHER_DEBOUNCE_MS", "-5")

        assert Settings().debounce_seconds == 0


# ===========================================================================
# Settings Service Tests
# ===========================================================================


class TestSettingsService:
    """Tests for gui/services/settings_service.py."""

    def test_save_settings_updates_env_and_file(self, tmp_path, monkeypatch):
        from gui.services.settings_service import save_settings

        env_file = tmp_path / ".env"
        env_file.write_text("LAUNCHER_DEBOUNCE_MS=300\n")
        monkeypatch.setenv("LAUNCHER_DEBOUNCE_MS", "300")

        save_settings({"LAUNCHER_DEBOUNCE_MS": "150"}, env_path=env_file)

        assert Settings().debounce_ms == 150
        assert "150" in env_file.read_text()

    def test_save_settings_without_file_only_sets_env(self, tmp_path, monkeypatch):
        from gui.services.settings_service import save_settings

        env_file = tmp_path / "missing.env"
        monkeypatch.setenv("LAUNCHER_HISTORY_WINDOW", "5")

        save_settings({"LAUNCHER_HISTORY_WINDOW": 8}, env_path=env_file)

        assert Settings().history_window == 8
        assert not env_file.exists()


# ===========================================================================
# Client Factory Tests
# ===========================================================================


class TestClients:
    """Tests for gui/services/clients.py."""

    def test_default_provider_uses_host_command(self):
        from gui.services.clients import get_backend

        backend = get_backend(AsyncMock(), Settings(assistant_provider="backend"))

        assert isinstance(backend, CommandBackend)
        assert backend._assistant is None

    def test_openai_provider_attaches_assistant(self):
        from gui.services.chat_service import OpenAIAssistant
        from gui.services.clients import get_backend

        backend = get_backend(AsyncMock(), Settings(assistant_provider="OpenAI"))

        assert isinstance(backend._assistant, OpenAIAssistant)


# ===========================================================================
# Chat Service Tests
# ===========================================================================


class TestChatService:
    """Tests for gui/services/chat_service.py."""

    def test_response_text_prefers_output_text(self):
        from gui.services.chat_service import response_text

        assert response_text(SimpleNamespace(output_text="hello")) == "hello"

    def test_response_text_falls_back_to_message_items(self):
        from gui.services.chat_service import response_text

        response = SimpleNamespace(
            output_text="",
            output=[
                SimpleNamespace(type="reasoning", content=[]),
                SimpleNamespace(
                    type="message",
                    content=[
                        SimpleNamespace(type="output_text", text="line one"),
                        SimpleNamespace(type="refusal", text="ignored"),
                        SimpleNamespace(type="output_text", text="line two"),
                    ],
                ),
            ],
        )

        assert response_text(response) == "line one\nline two"

    @pytest.mark.asyncio
    async def test_assistant_requires_api_key(self):
        from gui.services.chat_service import OpenAIAssistant

        assistant = OpenAIAssistant(Settings(openai_api_key=None))

        with pytest.raises(RuntimeError, match="OPENAI_API_KEY"):
            await assistant.ask("hi")

    @pytest.mark.asyncio
    async def test_assistant_sends_single_turn_request(self):
        from gui.services.chat_service import OpenAIAssistant

        client = MagicMock()
        client.responses.create = AsyncMock(return_value=SimpleNamespace(output_text="42"))
        settings = Settings(
            openai_api_key="sk-test",
            openai_base_url=None,
            assistant_model="test-model",
            assistant_temperature=0.2,
            assistant_instructions="Be brief.",
        )

        with patch("gui.services.chat_service._client", return_value=client):
            answer = await OpenAIAssistant(settings).ask("meaning of life?")

        assert answer == "42"
        kwargs = client.responses.create.await_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["input"] == [{"role": "user", "content": "meaning of life?"}]
        assert kwargs["instructions"] == "Be brief."
        assert kwargs["temperature"] == 0.2
