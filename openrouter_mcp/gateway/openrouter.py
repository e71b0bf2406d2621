"""OpenRouter gateway using the openai SDK (OpenAI-compatible API)."""

import logging
import time
from typing import Any

import openai
from openai import AsyncOpenAI

from config.config_loader import GatewayConfig
from openrouter_mcp.gateway.base import ModelGateway, ProviderError
from openrouter_mcp.models import ChatTurn

logger = logging.getLogger(__name__)

_CATALOG = "catalog"


def _wrap_error(model: str, exc: Exception, timeout_sec: float) -> ProviderError:
    if isinstance(exc, openai.APITimeoutError):
        return ProviderError(model, f"Request timed out after {timeout_sec:g}s")
    if isinstance(exc, openai.APIStatusError):
        return ProviderError(model, f"API call failed: {exc.message}", status_code=exc.status_code)
    return ProviderError(model, f"API call failed: {exc}")


class OpenRouterGateway(ModelGateway):
    """OpenRouter via OpenAI-compatible API."""

    def __init__(self, config: GatewayConfig, client: AsyncOpenAI | None = None) -> None:
        self._config = config
        # SDK retries are off: retry_with_backoff is the only retry layer.
        # AsyncOpenAI refuses an empty key; the placeholder gets a 401 instead.
        self._client = client or AsyncOpenAI(
            api_key=config.api_key or "missing",
            base_url=config.base_url,
            default_headers=config.headers(),
            timeout=config.timeout_sec,
            max_retries=0,
        )

    async def complete(
        self,
        model: str,
        turns: list[ChatTurn],
        max_tokens: int,
        temperature: float | None = None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {
            "model": model,
            "messages": [t.to_message() for t in turns],
            "max_tokens": max_tokens,
        }
        if temperature is not None:
            params["temperature"] = temperature

        start = time.monotonic()
        try:
            response = await self._client.chat.completions.create(**params)
        except openai.OpenAIError as exc:
            raise _wrap_error(model, exc, self._config.timeout_sec) from exc

        latency = time.monotonic() - start
        # warnings=False: list-shaped content does not match the SDK's str field
        body = response.to_dict(warnings=False)
        logger.info(
            "%s: %.2fs, %s tokens",
            model,
            latency,
            (body.get("usage") or {}).get("total_tokens"),
        )
        return body

    async def list_models(self) -> list[dict[str, Any]]:
        try:
            page = await self._client.models.list()
        except openai.OpenAIError as exc:
            raise _wrap_error(_CATALOG, exc, self._config.timeout_sec) from exc
        models = [m.to_dict(warnings=False) for m in page.data]
        logger.debug("Catalog returned %d models", len(models))
        return models
