"""Multi-model comparison: parallel chat calls with per-model failure isolation."""

import asyncio
import logging

from config.config_loader import RetryConfig
from openrouter_mcp.chat import build_conversation, run_chat
from openrouter_mcp.gateway.base import ModelGateway, ProviderError
from openrouter_mcp.models import ComparisonResult

logger = logging.getLogger(__name__)

REASONING_PREVIEW_CHARS = 200

_SEPARATOR = "\n\n---\n\n"


async def _compare_one(
    gateway: ModelGateway,
    model: str,
    message: str,
    max_tokens: int,
    retry: RetryConfig,
) -> ComparisonResult:
    """Run one model's call. Never raises — failures become an error result."""
    try:
        outcome = await run_chat(gateway, model, build_conversation(message), max_tokens, retry=retry)
    except Exception as exc:
        logger.warning("Model %s failed in comparison: %s", model, exc)
        # Block header already names the model.
        error = exc.message if isinstance(exc, ProviderError) else str(exc)
        return ComparisonResult(model=model, success=False, error=error or type(exc).__name__)
    return ComparisonResult(model=model, success=True, reply=outcome.reply, usage=outcome.usage)


async def run_comparison(
    gateway: ModelGateway,
    models: list[str],
    message: str,
    max_tokens: int = 500,
    retry: RetryConfig = RetryConfig(),
) -> list[ComparisonResult]:
    """Send ``message`` to every model concurrently.

    Returns:
        One ComparisonResult per requested model, in request order.
    """
    if not models:
        raise ValueError("At least one model is required for a comparison")

    logger.info("Comparing %d models", len(models))
    results = await asyncio.gather(
        *(_compare_one(gateway, m, message, max_tokens, retry) for m in models)
    )
    succeeded = sum(1 for r in results if r.success)
    logger.info("Comparison complete: %d/%d models succeeded", succeeded, len(models))
    return list(results)


def _preview(text: str, limit: int = REASONING_PREVIEW_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def format_result(result: ComparisonResult) -> str:
    if not result.success:
        return f"**{result.model}:** ❌ Error - {result.error}"

    text = f"**{result.model}:**\n"
    if result.reply.reasoning:
        text += f"*Reasoning:* {_preview(result.reply.reasoning)}\n\n"
    content = result.reply.content if result.reply.content is not None else "(no content)"
    total = result.usage.total_tokens if result.usage and result.usage.total_tokens is not None else "n/a"
    text += f"{content}\n*Tokens: {total}*"
    return text


def format_comparison(results: list[ComparisonResult]) -> str:
    blocks = _SEPARATOR.join(format_result(r) for r in results)
    return f"Comparison of {len(results)} models:\n\n{blocks}"


async def compare_models(
    gateway: ModelGateway,
    models: list[str],
    message: str,
    max_tokens: int = 500,
    retry: RetryConfig = RetryConfig(),
) -> str:
    """Compare ``models`` on one message and return the rendered report."""
    results = await run_comparison(gateway, models, message, max_tokens, retry)
    return format_comparison(results)
