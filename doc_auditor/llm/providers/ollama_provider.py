"""
doc_auditor/llm/providers/ollama_provider.py
────────────────────────────────────────────
Local Ollama provider — /api/chat with a system message and JSON format.
Reads OLLAMA_BASE_URL, OLLAMA_MODEL, RUN_TEMPERATURE, MAX_TOKENS from .env.
"""
from __future__ import annotations

import os
from typing import Optional

import requests

from ..base import LLMClient


class OllamaProvider(LLMClient):
    """
    Requires a running server (`ollama serve`) with the model pulled
    (`ollama pull <model>`). Default base URL: http://localhost:11434
    """

    name = "ollama"

    def __init__(
        self,
        model: str = "",
        base_url: str = "",
        temperature: float = 0.0,
        max_tokens: int = 800,
        timeout: Optional[float] = None,
    ) -> None:
        self.model = model or os.getenv("OLLAMA_MODEL", "mistral:latest")
        self.base_url = (base_url or os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")).rstrip("/")
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout

    def generate(self, system: str, user: str) -> str:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user",   "content": user},
            ],
            "stream": False,
            "format": "json",
            "options": {
                "temperature": self.temperature,
                "num_predict": self.max_tokens,
            },
        }

        resp = requests.post(f"{self.base_url}/api/chat", json=payload, timeout=self.timeout)
        resp.raise_for_status()

        # {"message": {"role": "assistant", "content": "..."}, ...}
        return resp.json()["message"]["content"]
