"""Tests for LLM providers and the provider factory."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from doc_auditor.llm.providers import get_provider
from doc_auditor.llm.providers.gemini_provider import GeminiProvider
from doc_auditor.llm.providers.ollama_provider import OllamaProvider
from doc_auditor.llm.providers.openai_provider import OpenAIProvider


def _response(payload):
    resp = MagicMock()
    resp.json.return_value = payload
    resp.raise_for_status.return_value = None
    return resp


class TestGetProvider:
    """Tests for get_provider."""

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown provider"):
            get_provider("claude-ish")

    @patch.dict("os.environ", {"GEMINI_API_KEY": "g-key", "GEMINI_MODEL": "gemini-test"})
    def test_gemini_from_env(self):
        provider = get_provider("gemini")

        assert isinstance(provider, GeminiProvider)
        assert provider.api_key == "g-key"
        assert provider.model == "gemini-test"
        assert provider.tag == "gemini_gemini-test"

    @patch.dict("os.environ", {"OPENAI_API_KEY": "o-key", "REQUEST_TIMEOUT": "30"})
    def test_openai_overrides(self):
        provider = get_provider("OpenAI", model="gpt-test", temperature=0.5)

        assert isinstance(provider, OpenAIProvider)
        assert provider.model == "gpt-test"
        assert provider.temperature == 0.5
        assert provider.timeout == 30.0

    @patch.dict("os.environ", {"REQUEST_TIMEOUT": ""})
    def test_ollama_needs_no_key(self):
        provider = get_provider("ollama", model="mistral:latest", base_url="http://box:11434/")

        assert isinstance(provider, OllamaProvider)
        assert provider.base_url == "http://box:11434"
        assert provider.timeout is None
        assert provider.tag == "ollama_mistral_latest"

    @patch.dict("os.environ", {"GEMINI_API_KEY": ""})
    def test_missing_key(self):
        with pytest.raises(EnvironmentError, match="GEMINI_API_KEY"):
            get_provider("gemini")


class TestGeminiProvider:
    """Tests for GeminiProvider.generate."""

    @patch("doc_auditor.llm.providers.gemini_provider.requests.post")
    def test_generate(self, mock_post):
        mock_post.return_value = _response({
            "candidates": [{"content": {"parts": [{"text": '{"a": '}, {"text": "1}"}]}}]
        })
        provider = GeminiProvider(api_key="k", model="gemini-2.0-flash")

        assert provider.generate("SYS", "USER") == '{"a": 1}'

        url = mock_post.call_args.args[0]
        payload = mock_post.call_args.kwargs["json"]
        assert url.endswith("/models/gemini-2.0-flash:generateContent")
        assert payload["systemInstruction"]["parts"][0]["text"] == "SYS"
        assert payload["contents"][0]["parts"][0]["text"] == "USER"
        assert mock_post.call_args.kwargs["headers"] == {"x-goog-api-key": "k"}

    @patch("doc_auditor.llm.providers.gemini_provider.requests.post")
    def test_no_candidates(self, mock_post):
        mock_post.return_value = _response({"promptFeedback": {"blockReason": "SAFETY"}})
        provider = GeminiProvider(api_key="k")

        assert provider.generate("SYS", "USER") == ""

    @patch("doc_auditor.llm.providers.gemini_provider.requests.post")
    def test_http_error_propagates(self, mock_post):
        resp = MagicMock()
        resp.raise_for_status.side_effect = requests.HTTPError("403 Forbidden")
        mock_post.return_value = resp
        provider = GeminiProvider(api_key="k")

        with pytest.raises(requests.HTTPError):
            provider.generate("SYS", "USER")


class TestOpenAIProvider:
    """Tests for OpenAIProvider.generate."""

    @patch("doc_auditor.llm.providers.openai_provider.requests.post")
    def test_generate(self, mock_post):
        mock_post.return_value = _response({"choices": [{"message": {"content": "{}"}}]})
        provider = OpenAIProvider(api_key="k", model="gpt-4.1")

        assert provider.generate("SYS", "USER") == "{}"

        payload = mock_post.call_args.kwargs["json"]
        assert payload["messages"] == [
            {"role": "system", "content": "SYS"},
            {"role": "user", "content": "USER"},
        ]
        assert payload["response_format"] == {"type": "json_object"}


class TestOllamaProvider:
    """Tests for OllamaProvider.generate."""

    @patch("doc_auditor.llm.providers.ollama_provider.requests.post")
    def test_generate(self, mock_post):
        mock_post.return_value = _response({"message": {"role": "assistant", "content": "{}"}})
        provider = OllamaProvider(model="mistral:latest", base_url="http://localhost:11434")

        assert provider.generate("SYS", "USER") == "{}"
        assert mock_post.call_args.args[0] == "http://localhost:11434/api/chat"
        assert mock_post.call_args.kwargs["json"]["stream"] is False
