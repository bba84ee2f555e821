"""Tests for LLMClient (Claude API wrapper)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from freelanly.clients.llm_client import DEFAULT_MODEL, LLMClient, LLMResponse

ANTHROPIC = "freelanly.clients.llm_client.anthropic.AsyncAnthropic"


def _make_api_message(text: str, input_tokens: int = 100, output_tokens: int = 50) -> MagicMock:
    """Build a mock anthropic Message-like object."""
    message = MagicMock()
    message.usage.input_tokens = input_tokens
    message.usage.output_tokens = output_tokens
    message.content = [MagicMock(text=text)]
    return message


class TestLLMClientInit:
    def test_init_default_creates_client_with_no_kwargs(self):
        with patch(ANTHROPIC) as mock_cls:
            llm = LLMClient()
            mock_cls.assert_called_once_with()
        assert llm.max_attempts == 1

    def test_init_passes_key_and_timeout(self):
        with patch(ANTHROPIC) as mock_cls:
            LLMClient(api_key="test-key", timeout=30.0)
            mock_cls.assert_called_once_with(api_key="test-key", timeout=30.0)

    def test_max_attempts_floor(self):
        with patch(ANTHROPIC):
            assert LLMClient(max_attempts=0).max_attempts == 1


class TestLLMClientGenerate:
    async def test_generate_returns_llm_response(self):
        with patch(ANTHROPIC) as mock_cls:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(
                return_value=_make_api_message("hello world", input_tokens=100, output_tokens=50)
            )
            mock_cls.return_value = mock_client

            llm = LLMClient()
            result = await llm.generate("say hello", system="be brief", max_tokens=800)

        assert isinstance(result, LLMResponse)
        assert result.text == "hello world"
        assert (result.input_tokens, result.output_tokens) == (100, 50)
        assert result.model == DEFAULT_MODEL
        kwargs = mock_client.messages.create.call_args.kwargs
        assert kwargs["system"] == "be brief"
        assert kwargs["max_tokens"] == 800
        assert kwargs["messages"] == [{"role": "user", "content": "say hello"}]

    async def test_no_system_prompt_omits_key(self):
        with patch(ANTHROPIC) as mock_cls:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(return_value=_make_api_message("ok"))
            mock_cls.return_value = mock_client

            await LLMClient().generate("prompt")

        assert "system" not in mock_client.messages.create.call_args.kwargs

    async def test_failure_not_retried_by_default(self):
        with patch(ANTHROPIC) as mock_cls:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(side_effect=ConnectionError("down"))
            mock_cls.return_value = mock_client

            llm = LLMClient()
            with pytest.raises(ConnectionError):
                await llm.generate("prompt")

        assert mock_client.messages.create.await_count == 1

    async def test_retries_when_configured(self):
        with patch(ANTHROPIC) as mock_cls, patch("asyncio.sleep", new=AsyncMock()):
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(
                side_effect=[ConnectionError("blip"), _make_api_message("second try")]
            )
            mock_cls.return_value = mock_client

            result = await LLMClient(max_attempts=2).generate("prompt")

        assert result.text == "second try"
        assert mock_client.messages.create.await_count == 2

    async def test_model_override_passed_through(self):
        with patch(ANTHROPIC) as mock_cls:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(
                return_value=_make_api_message("resp", input_tokens=20, output_tokens=8)
            )
            mock_cls.return_value = mock_client

            llm = LLMClient()
            result = await llm.generate("prompt", model="claude-haiku-4-5-20251001")

        assert result.model == "claude-haiku-4-5-20251001"
        assert (result.input_tokens, result.output_tokens) == (20, 8)
        assert mock_client.messages.create.call_args.kwargs["model"] == "claude-haiku-4-5-20251001"
        assert set(vars(llm)) == {"client", "max_attempts"}
