"""
Provider bindings and configuration — Tests

SDK clients are patched out; no network calls.
"""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from universal_method import (
    DEFAULT_INVOKERS,
    MissingCredentialError,
    ModelOptions,
    Provider,
    Settings,
    UniversalMethodOptions,
    UnsupportedProviderError,
    get_settings,
    resolve_model_options,
    resolve_provider,
)
from universal_method.providers import invoke_gemini, invoke_openai
from universal_method.providers._system import SYSTEM_PROMPT
from conftest import make_settings


def _chat_completion(content: str | None) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


# --- OpenAI ---


class TestInvokeOpenAI:
    @pytest.mark.asyncio
    async def test_sends_system_and_user_messages(self):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=_chat_completion("  12 \n"))

        with patch("universal_method.providers.openai.AsyncOpenAI") as client_cls:
            client_cls.return_value.__aenter__.return_value = client
            text = await invoke_openai("What is 5 plus 7?", "sk-test", ModelOptions("gpt-4o", 0.3))

        assert text == "12"
        client_cls.assert_called_once_with(api_key="sk-test")
        kwargs = client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["temperature"] == 0.3
        assert kwargs["messages"] == [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": "What is 5 plus 7?"},
        ]

    @pytest.mark.asyncio
    async def test_empty_content_becomes_empty_string(self):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=_chat_completion(None))

        with patch("universal_method.providers.openai.AsyncOpenAI") as client_cls:
            client_cls.return_value.__aenter__.return_value = client
            text = await invoke_openai("q", "sk-test", ModelOptions("gpt-4o", 0.3))

        assert text == ""

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(side_effect=RuntimeError("invalid api key"))

        with patch("universal_method.providers.openai.AsyncOpenAI") as client_cls:
            client_cls.return_value.__aenter__.return_value = client
            with pytest.raises(RuntimeError, match="invalid api key"):
                await invoke_openai("q", "sk-bad", ModelOptions("gpt-4o", 0.3))


# --- Gemini ---


class TestInvokeGemini:
    @staticmethod
    def _wire(genai, generate: AsyncMock) -> MagicMock:
        client = MagicMock()
        client.models.generate_content = generate
        session = genai.Client.return_value.aio
        session.__aenter__.return_value = client
        return session

    @pytest.mark.asyncio
    async def test_sends_prompt_with_system_instruction(self):
        with patch("universal_method.providers.gemini.genai") as genai:
            generate = AsyncMock(return_value=SimpleNamespace(text=" true \n"))
            session = self._wire(genai, generate)

            text = await invoke_gemini("Is 5 > 3?", "g-key", ModelOptions("gemini-2.0-flash", 0.3))

        assert text == "true"
        genai.Client.assert_called_once_with(api_key="g-key")
        session.__aexit__.assert_awaited_once()
        kwargs = generate.await_args.kwargs
        assert kwargs["model"] == "gemini-2.0-flash"
        assert kwargs["contents"] == "Is 5 > 3?"
        assert SYSTEM_PROMPT in str(kwargs["config"].system_instruction)
        assert kwargs["config"].temperature == 0.3

    @pytest.mark.asyncio
    async def test_missing_text_becomes_empty_string(self):
        with patch("universal_method.providers.gemini.genai") as genai:
            self._wire(genai, AsyncMock(return_value=SimpleNamespace(text=None)))

            text = await invoke_gemini("q", "g-key", ModelOptions("gemini-2.0-flash", 0.3))

        assert text == ""

    @pytest.mark.asyncio
    async def test_client_closed_when_call_fails(self):
        with patch("universal_method.providers.gemini.genai") as genai:
            session = self._wire(genai, AsyncMock(side_effect=RuntimeError("quota exceeded")))

            with pytest.raises(RuntimeError, match="quota exceeded"):
                await invoke_gemini("q", "g-key", ModelOptions("gemini-2.0-flash", 0.3))

        session.__aexit__.assert_awaited_once()


# --- Provider selection ---


class TestProviderSelection:
    def test_default_table_covers_both_providers(self):
        assert DEFAULT_INVOKERS[Provider.OPENAI] is invoke_openai
        assert DEFAULT_INVOKERS[Provider.GEMINI] is invoke_gemini

    def test_default_table_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_INVOKERS[Provider.OPENAI] = invoke_gemini

    @pytest.mark.parametrize(
        "selector, expected",
        [
            ("openai", Provider.OPENAI),
            ("OpenAI-GPT4", Provider.OPENAI),
            ("azure-openai", Provider.OPENAI),
            ("gemini", Provider.GEMINI),
            ("Gemini-Pro", Provider.GEMINI),
            ("claude", None),
            ("", None),
            (None, None),
        ],
    )
    def test_resolve_provider(self, selector, expected):
        assert resolve_provider(selector) is expected

    def test_model_defaults(self):
        assert resolve_model_options(Provider.OPENAI) == ModelOptions("gpt-4o", 0.3)
        assert resolve_model_options(Provider.GEMINI) == ModelOptions("gemini-2.0-flash", 0.3)

    def test_partial_override_keeps_other_default(self):
        options = resolve_model_options(Provider.GEMINI, UniversalMethodOptions(temperature=0.9))
        assert options == ModelOptions("gemini-2.0-flash", 0.9)

    def test_zero_temperature_is_honoured(self):
        options = resolve_model_options(Provider.OPENAI, UniversalMethodOptions(temperature=0.0))
        assert options.temperature == 0.0


# --- Configuration ---


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("UNIVERSAL_METHOD_MODEL", raising=False)
        monkeypatch.delenv("UNIVERSAL_METHOD_KEY", raising=False)
        settings = Settings(_env_file=None)
        assert settings.model == "openai"
        assert settings.key is None
        assert settings.provider is Provider.OPENAI

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("UNIVERSAL_METHOD_MODEL", "gemini")
        monkeypatch.setenv("UNIVERSAL_METHOD_KEY", "env-key")
        settings = Settings(_env_file=None)
        assert settings.provider is Provider.GEMINI
        assert settings.require_key() == "env-key"

    def test_key_is_not_exposed_in_repr(self):
        assert "secret-value" not in repr(make_settings(key="secret-value"))

    def test_missing_key_raises(self):
        with pytest.raises(MissingCredentialError, match="UNIVERSAL_METHOD_KEY"):
            make_settings(key=None).require_key()

    def test_empty_key_raises(self):
        with pytest.raises(MissingCredentialError):
            make_settings(key="").require_key()

    def test_unsupported_model_raises(self):
        with pytest.raises(UnsupportedProviderError, match="Unsupported model: llama"):
            make_settings(model="llama").require_provider()

    def test_settings_are_frozen(self):
        settings = make_settings()
        with pytest.raises(Exception):
            settings.model = "gemini"

    def test_get_settings_is_cached(self, monkeypatch):
        monkeypatch.setenv("UNIVERSAL_METHOD_MODEL", "gemini")
        get_settings.cache_clear()
        try:
            first = get_settings()
            monkeypatch.setenv("UNIVERSAL_METHOD_MODEL", "openai")
            assert get_settings() is first
            assert first.provider is Provider.GEMINI
        finally:
            get_settings.cache_clear()
