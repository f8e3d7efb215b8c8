"""Client factories for the GUI layer."""

from __future__ import annotations

from typing import Optional

from launcher.backend_client import CommandBackend, Invoke
from launcher.config import Settings, get_settings


def get_backend(invoke: Invoke, settings: Optional[Settings] = None) -> CommandBackend:
    """Return a backend bound to the host's command bridge.

    The assistant goes through the host's `llms` command unless the settings
    ask for the OpenAI provider.
    """

    settings = settings or get_settings()
    assistant = None
    if (settings.assistant_provider or "").strip().lower() == "openai":
        from gui.services.chat_service import OpenAIAssistant

        assistant = OpenAIAssistant(settings)
    return CommandBackend(invoke, assistant=assistant)
