"""Anthropic Text Generator: wraps AsyncAnthropic behind the TextGenerator protocol.

Invariants:
    - Exactly one API attempt per call (SDK retries disabled, no backoff)
    - Sampling parameters left as None are not sent; top_p is dropped for models
      that reject it alongside temperature
    - All failures mapped to ModelAPIError (core/errors.py), including empty output
    - Prompt turns are converted to Messages API dicts here and nowhere else

Design Decisions:
    - Leading instruction sent as a user turn: the conversation order built by
      compose_prompt is preserved exactly on the wire
"""

import logging
from collections.abc import Sequence

import anthropic
from anthropic import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    RateLimitError,
)

from chatbot.core.domain_types import GenerationConfig, PromptTurn
from chatbot.core.errors import ErrorContext, ModelAPIError

logger = logging.getLogger(__name__)


# Model families that reject temperature and top_p in the same request.
SINGLE_SAMPLING_MODEL_PREFIXES = (
    "claude-opus-4-1",
    "claude-opus-4-5",
    "claude-opus-4-6",
    "claude-sonnet-4-5",
    "claude-haiku-4-5",
)


def to_api_messages(turns: Sequence[PromptTurn]) -> list[dict]:
    return [{"role": t.role.value, "content": t.text} for t in turns]


def accepts_combined_sampling(model: str) -> bool:
    """True if the model takes temperature, top_p and top_k together."""
    return not model.startswith(SINGLE_SAMPLING_MODEL_PREFIXES)


def to_sampling_params(config: GenerationConfig, model: str | None = None) -> dict:
    """Messages API sampling kwargs; top_p yields to temperature where the model requires it."""
    params: dict = {"max_tokens": config.max_output_tokens}
    if config.temperature is not None:
        params["temperature"] = config.temperature
    if config.top_p is not None:
        params["top_p"] = config.top_p
    if config.top_k is not None:
        params["top_k"] = config.top_k
    if model and not accepts_combined_sampling(model) and "temperature" in params:
        params.pop("top_p", None)
    return params


class AnthropicTextGenerator:
    """Single-shot text generation with Anthropic error mapping."""

    def __init__(
        self,
        api_key: str,
        model: str,
        timeout_seconds: float | None = None,
    ):
        self.client = anthropic.AsyncAnthropic(
            api_key=api_key,
            timeout=timeout_seconds,
            max_retries=0,
        )
        self.model = model

    async def generate(
        self,
        turns: Sequence[PromptTurn],
        config: GenerationConfig,
        context: ErrorContext | None = None,
    ) -> str:
        try:
            response = await self.client.messages.create(
                model=self.model,
                messages=to_api_messages(turns),
                **to_sampling_params(config, self.model),
            )
        except RateLimitError:
            raise ModelAPIError(
                "Rate limit exceeded", "rate_limit", context=context,
            )
        except APITimeoutError:
            raise ModelAPIError("API timeout", "timeout", context=context)
        except APIConnectionError as e:
            raise ModelAPIError(str(e), "connection_error", context=context)
        except APIStatusError as e:
            raise ModelAPIError(
                str(e), f"status_{e.status_code}", context=context,
            )
        except Exception as e:
            logger.error(f"Unexpected Anthropic error: {e}", exc_info=True)
            raise ModelAPIError(str(e), "unknown", context=context)

        text = "".join(
            block.text for block in response.content
            if getattr(block, "type", None) == "text"
        ).strip()
        if not text:
            raise ModelAPIError(
                f"No text in response (stop_reason={response.stop_reason})",
                "empty_response", context=context,
            )
        self._log_success(response)
        return text

    async def aclose(self) -> None:
        await self.client.close()

    def _log_success(self, response) -> None:
        usage = response.usage
        logger.info(
            "Anthropic API success",
            extra={
                "input_tokens": usage.input_tokens,
                "output_tokens": usage.output_tokens,
            },
        )
