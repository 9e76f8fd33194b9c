"""
doc_auditor/llm/providers/gemini_provider.py
────────────────────────────────────────────
Google Gemini provider (Generative Language REST API, requests-based).
Reads GEMINI_API_KEY, GEMINI_MODEL, RUN_TEMPERATURE, MAX_TOKENS from .env.
"""
from __future__ import annotations

import os
from typing import Optional

import requests

from ..base import LLMClient


class GeminiProvider(LLMClient):
    """Calls ``models/{model}:generateContent`` with a system instruction."""

    name = "gemini"
    BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

    def __init__(
        self,
        api_key: str = "",
        model: str = "gemini-2.0-flash",
        temperature: float = 0.0,
        max_tokens: int = 800,
        timeout: Optional[float] = None,
    ) -> None:
        self.api_key = api_key or os.getenv("GEMINI_API_KEY", "")
        self.model = model or os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout

        if not self.api_key:
            raise EnvironmentError(
                "GEMINI_API_KEY is not set. Add it to .env or export it as an "
                "environment variable."
            )

    def generate(self, system: str, user: str) -> str:
        url = f"{self.BASE_URL}/models/{self.model}:generateContent"
        payload = {
            "systemInstruction": {"parts": [{"text": system}]},
            "contents": [
                {"role": "user", "parts": [{"text": user}]},
            ],
            "generationConfig": {
                "temperature": self.temperature,
                "maxOutputTokens": self.max_tokens,
                "responseMimeType": "application/json",
            },
        }

        resp = requests.post(
            url,
            json=payload,
            headers={"x-goog-api-key": self.api_key},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        data = resp.json()

        # {"candidates": [{"content": {"parts": [{"text": "..."}]}}], ...}
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(p.get("text", "") for p in parts)
