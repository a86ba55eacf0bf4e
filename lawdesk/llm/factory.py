from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from lawdesk.config import settings

if TYPE_CHECKING:
    from langchain_core.language_models.chat_models import BaseChatModel


def require_api_key(api_key: Optional[str]) -> str:
    """Return the xAI key or refuse to go any further."""
    if not api_key:
        raise RuntimeError("XAI_API_KEY (or GROK_API_KEY) environment variable is required for AI chat")
    return api_key


# Checked when the module is imported so a missing key stops the app at startup
XAI_API_KEY = require_api_key(settings.XAI_API_KEY)

# Module-level cache, cleared by tests and settings reloads
_llm_cache: dict[str, BaseChatModel] = {}


def clear_llm_cache() -> None:
    """Drop cached chat model instances so they're recreated on next call."""
    _llm_cache.clear()


def _create_chat_model(*, model: str, temperature: float, max_tokens: int) -> BaseChatModel:
    from langchain_openai import ChatOpenAI

    # xAI speaks the OpenAI chat completions protocol
    return ChatOpenAI(
        model=model,
        temperature=temperature,
        max_tokens=max_tokens,
        api_key=XAI_API_KEY,
        base_url=settings.XAI_BASE_URL,
    )


def get_chat_llm() -> BaseChatModel:
    """Chat Engine. Used for: the website assistant."""
    key = "chat"
    if key not in _llm_cache:
        _llm_cache[key] = _create_chat_model(
            model=settings.XAI_MODEL,
            temperature=settings.XAI_TEMPERATURE,
            max_tokens=settings.XAI_MAX_TOKENS,
        )
    return _llm_cache[key]
