"""Assistant backed by the OpenAI Responses API.

Used in place of the host's `llms` command when
`LAUNCHER_ASSISTANT_PROVIDER=openai`. `OPENAI_BASE_URL` may point at any
compatible endpoint (a local Ollama server, for instance).
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from launcher.config import Settings, get_settings

if TYPE_CHECKING:  # pragma: no cover
    from openai import AsyncOpenAI as AsyncOpenAIClient


@lru_cache(maxsize=4)
def _client(api_key: str, base_url: Optional[str]) -> "AsyncOpenAIClient":
    # Lazily import OpenAI so the launcher can boot without it; only the
    # assistant mode needs the SDK.
    try:
        from openai import AsyncOpenAI
    except Exception as e:  # pylint: disable=broad-except
        raise RuntimeError(
            "OpenAI SDK is required for the assistant, but failed to import. "
            "Install/repair the 'openai' package in your venv and retry. "
            f"(import error: {e})"
        ) from e

    return AsyncOpenAI(api_key=api_key, base_url=base_url)


def response_text(response: Any) -> str:
    """Pull the text out of a Responses API result."""
    text = getattr(response, "output_text", None)
    if text:
        return text
    # Fallback: concatenate message output_text items
    parts = []
    for item in getattr(response, "output", []) or []:
        if getattr(item, "type", None) == "message":
            for content in getattr(item, "content", []) or []:
                if getattr(content, "type", None) == "output_text":
                    parts.append(content.text)
    return "\n".join(parts)


async def send_response(
    messages: List[Dict[str, str]],
    model: str,
    *,
    api_key: str,
    base_url: Optional[str] = None,
    temperature: float = 0.7,
    instructions: Optional[str] = None,
) -> Dict[str, Any]:
    """Send a conversation to the Responses API.

    Args:
        messages: List of {role, content} dicts (user/assistant).
        model: Model ID.
        api_key: API key for the endpoint.
        base_url: Optional OpenAI-compatible endpoint.
        temperature: Sampling temperature.
        instructions: Optional system message passed via `instructions`.
    Returns:
        dict with keys: text (aggregated), raw (response object).
    """
    client = _client(api_key, base_url)
    payload: Dict[str, Any] = {
        "model": model,
        "input": [
            {"role": m.get("role"), "content": m.get("content", "")} for m in messages
        ],
        "temperature": temperature,
    }
    if instructions:
        payload["instructions"] = instructions

    response = await client.responses.create(**payload)
    return {"text": response_text(response), "raw": response}


class OpenAIAssistant:
    """Single-turn assistant: each `ask` sends just the current question."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    async def ask(self, query: str) -> str:
        if not self.settings.openai_api_key:
            raise RuntimeError("OPENAI_API_KEY is required for the assistant.")
        result = await send_response(
            [{"role": "user", "content": query}],
            self.settings.assistant_model,
            api_key=self.settings.openai_api_key,
            base_url=self.settings.openai_base_url,
            temperature=self.settings.assistant_temperature,
            instructions=self.settings.assistant_instructions or None,
        )
        return result["text"]
