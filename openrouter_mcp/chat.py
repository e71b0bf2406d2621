"""Single-model chat: build conversation, call with retry, render the report."""

import logging
from dataclasses import dataclass
from typing import Any

from config.config_loader import RetryConfig
from openrouter_mcp.gateway.base import ModelGateway, ProviderError
from openrouter_mcp.models import ChatTurn, NormalizedReply, UsageStats
from openrouter_mcp.normalize import normalize_message
from openrouter_mcp.retry import retry_with_backoff

logger = logging.getLogger(__name__)

NO_CONTENT = "(no content returned)"


@dataclass(frozen=True)
class ChatOutcome:
    model: str
    reply: NormalizedReply
    usage: UsageStats


def build_conversation(message: str, system_prompt: str | None = None) -> list[ChatTurn]:
    """Return [system?, user]. An empty system prompt is treated as absent."""
    turns: list[ChatTurn] = []
    if system_prompt:
        turns.append(ChatTurn(role="system", content=system_prompt))
    turns.append(ChatTurn(role="user", content=message))
    return turns


def first_message(model: str, body: dict[str, Any]) -> dict[str, Any]:
    """Pull ``choices[0].message`` out of a completion body."""
    choices = body.get("choices") or []
    if not choices:
        error = body.get("error") or {}
        detail = error.get("message") if isinstance(error, dict) else None
        raise ProviderError(model, detail or "Response contained no choices")
    return choices[0].get("message") or {}


async def run_chat(
    gateway: ModelGateway,
    model: str,
    turns: list[ChatTurn],
    max_tokens: int,
    temperature: float | None = None,
    retry: RetryConfig = RetryConfig(),
) -> ChatOutcome:
    """Send ``turns`` to ``model`` through the retry wrapper and normalize the reply.

    Raises:
        ProviderError: When the call fails fatally or retries are exhausted.
    """
    body = await retry_with_backoff(
        lambda: gateway.complete(model, turns, max_tokens, temperature),
        max_retries=retry.max_retries,
        base_delay_ms=retry.base_delay_ms,
        max_jitter_ms=retry.max_jitter_ms,
        retry_on_status=retry.retry_on_status,
    )
    reply = normalize_message(first_message(model, body))
    return ChatOutcome(model=model, reply=reply, usage=UsageStats.from_raw(body.get("usage")))


def _count(value: int | None) -> str:
    return "n/a" if value is None else str(value)


def format_chat_report(outcome: ChatOutcome) -> str:
    text = f"**Model:** {outcome.model}\n"
    if outcome.reply.reasoning:
        text += f"**Reasoning:**\n{outcome.reply.reasoning}\n\n"
    content = outcome.reply.content if outcome.reply.content is not None else NO_CONTENT
    text += f"**Response:** {content}\n\n"
    text += (
        "**Usage:**\n"
        f"- Prompt tokens: {_count(outcome.usage.prompt_tokens)}\n"
        f"- Completion tokens: {_count(outcome.usage.completion_tokens)}\n"
        f"- Total tokens: {_count(outcome.usage.total_tokens)}"
    )
    return text


async def chat_with_model(
    gateway: ModelGateway,
    model: str,
    message: str,
    max_tokens: int = 1000,
    temperature: float = 0.7,
    system_prompt: str | None = None,
    retry: RetryConfig = RetryConfig(),
) -> str:
    """Chat with one model and return the rendered report."""
    turns = build_conversation(message, system_prompt)
    logger.info("Chat with %s (%d turns, max_tokens=%d)", model, len(turns), max_tokens)
    outcome = await run_chat(gateway, model, turns, max_tokens, temperature, retry)
    return format_chat_report(outcome)
