"""
doc_auditor/llm/providers/__init__.py
─────────────────────────────────────
Factory that returns the right LLMClient for a given provider name.
"""
from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

PROVIDERS = ("gemini", "openai", "ollama")


def _timeout(kwargs: dict) -> Optional[float]:
    value = kwargs.get("timeout", os.getenv("REQUEST_TIMEOUT", ""))
    if value in (None, ""):
        return None
    return float(value)


def get_provider(name: str, **kwargs):
    """
    Parameters
    ----------
    name : "gemini" | "openai" | "ollama"
    **kwargs : override any env-based default (model, api_key, base_url,
               temperature, max_tokens, seed, timeout)

    Returns
    -------
    LLMClient instance
    """
    name = name.lower()
    temperature = float(kwargs.get("temperature", os.getenv("RUN_TEMPERATURE", 0)))
    max_tokens = int(kwargs.get("max_tokens", os.getenv("MAX_TOKENS", 800)))

    if name == "gemini":
        from .gemini_provider import GeminiProvider
        return GeminiProvider(
            api_key=kwargs.get("api_key", os.getenv("GEMINI_API_KEY", "")),
            model=kwargs.get("model", os.getenv("GEMINI_MODEL", "gemini-2.0-flash")),
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=_timeout(kwargs),
        )

    elif name == "openai":
        from .openai_provider import OpenAIProvider
        return OpenAIProvider(
            api_key=kwargs.get("api_key", os.getenv("OPENAI_API_KEY", "")),
            model=kwargs.get("model", os.getenv("OPENAI_MODEL", "gpt-4.1")),
            temperature=temperature,
            max_tokens=max_tokens,
            seed=int(kwargs.get("seed", os.getenv("RUN_SEED", 42))),
            timeout=_timeout(kwargs),
        )

    elif name == "ollama":
        from .ollama_provider import OllamaProvider
        return OllamaProvider(
            model=kwargs.get("model", os.getenv("OLLAMA_MODEL", "mistral:latest")),
            base_url=kwargs.get("base_url", os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")),
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=_timeout(kwargs),
        )

    else:
        raise ValueError(
            f"Unknown provider '{name}'. Supported: {', '.join(repr(p) for p in PROVIDERS)}."
        )
