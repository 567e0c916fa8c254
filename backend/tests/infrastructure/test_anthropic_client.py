"""Anthropic Text Generator: tests for wire mapping and error translation.

Tests cover:
    - PromptTurn → Messages API dicts
    - None sampling parameters omitted; top_p dropped for single-sampling models
    - Text blocks joined; empty output → ModelAPIError
    - SDK exceptions mapped to ModelAPIError with a stable error type
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from anthropic import APIConnectionError, APITimeoutError, RateLimitError

from chatbot.core.domain_types import (
    CLAIM_EXTRACTION_CONFIG, REPLY_GENERATION_CONFIG, PromptTurn,
)
from chatbot.core.errors import ModelAPIError
from chatbot.infrastructure.anthropic_client import (
    AnthropicTextGenerator, accepts_combined_sampling, to_api_messages,
    to_sampling_params,
)

_REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def _response(*texts, stop_reason="end_turn"):
    return SimpleNamespace(
        content=[SimpleNamespace(type="text", text=t) for t in texts],
        stop_reason=stop_reason,
        usage=SimpleNamespace(input_tokens=12, output_tokens=3),
    )


def _generator(create):
    generator = AnthropicTextGenerator(api_key="sk-ant-test", model="test-model")
    generator.client = MagicMock()
    generator.client.messages.create = create
    return generator


def test_turns_mapped_to_api_messages():
    turns = [PromptTurn.user("a"), PromptTurn.assistant("b")]
    assert to_api_messages(turns) == [
        {"role": "user", "content": "a"},
        {"role": "assistant", "content": "b"},
    ]


def test_reply_config_sends_all_sampling_params():
    assert to_sampling_params(REPLY_GENERATION_CONFIG) == {
        "max_tokens": 1024, "temperature": 0.7, "top_p": 0.95, "top_k": 40,
    }


def test_unset_sampling_params_omitted():
    assert to_sampling_params(CLAIM_EXTRACTION_CONFIG) == {
        "max_tokens": 1024, "temperature": 0.3,
    }


def test_single_sampling_model_drops_top_p():
    assert not accepts_combined_sampling("claude-sonnet-4-5-20250929")
    assert to_sampling_params(REPLY_GENERATION_CONFIG, "claude-haiku-4-5") == {
        "max_tokens": 1024, "temperature": 0.7, "top_k": 40,
    }


def test_combined_sampling_model_keeps_all_params():
    assert accepts_combined_sampling("claude-sonnet-4-20250514")
    params = to_sampling_params(REPLY_GENERATION_CONFIG, "claude-sonnet-4-20250514")
    assert params["top_p"] == 0.95


async def test_generate_returns_joined_text():
    create = AsyncMock(return_value=_response("Hello ", "there"))
    generator = _generator(create)

    text = await generator.generate([PromptTurn.user("hi")], REPLY_GENERATION_CONFIG)

    assert text == "Hello there"
    kwargs = create.call_args.kwargs
    assert kwargs["model"] == "test-model"
    assert kwargs["messages"] == [{"role": "user", "content": "hi"}]
    assert kwargs["top_k"] == 40


async def test_empty_output_raises():
    generator = _generator(AsyncMock(return_value=_response(stop_reason="max_tokens")))
    with pytest.raises(ModelAPIError) as exc_info:
        await generator.generate([PromptTurn.user("hi")], REPLY_GENERATION_CONFIG)
    assert exc_info.value.api_error_type == "empty_response"


@pytest.mark.parametrize("error, kind", [
    (APIConnectionError(request=_REQUEST), "connection_error"),
    (APITimeoutError(request=_REQUEST), "timeout"),
    (
        RateLimitError(
            "slow down",
            response=httpx.Response(429, request=_REQUEST),
            body=None,
        ),
        "rate_limit",
    ),
    (ValueError("unexpected"), "unknown"),
])
async def test_sdk_errors_mapped(error, kind):
    generator = _generator(AsyncMock(side_effect=error))
    with pytest.raises(ModelAPIError) as exc_info:
        await generator.generate([PromptTurn.user("hi")], REPLY_GENERATION_CONFIG)
    assert exc_info.value.api_error_type == kind


async def test_generate_drops_top_p_for_single_sampling_model():
    create = AsyncMock(return_value=_response("ok"))
    generator = _generator(create)
    generator.model = "claude-haiku-4-5-20251001"

    await generator.generate([PromptTurn.user("hi")], REPLY_GENERATION_CONFIG)

    kwargs = create.call_args.kwargs
    assert "top_p" not in kwargs
    assert kwargs["temperature"] == 0.7
