"""Shared pytest fixtures."""

import asyncio
from typing import Any

import pytest

from config.config_loader import AppConfig, GatewayConfig, RetryConfig, ServerConfig
from openrouter_mcp.gateway.base import ModelGateway, ProviderError
from openrouter_mcp.models import ChatTurn


def completion_body(
    content: Any = "Mock response",
    reasoning: str | None = None,
    usage: dict[str, int] | None = None,
) -> dict[str, Any]:
    message: dict[str, Any] = {"role": "assistant", "content": content}
    if reasoning is not None:
        message["reasoning_content"] = reasoning
    return {
        "choices": [{"index": 0, "message": message}],
        "usage": usage if usage is not None else {"prompt_tokens": 5, "completion_tokens": 7, "total_tokens": 12},
    }


def status_error(status: int, model: str = "mock/model") -> ProviderError:
    return ProviderError(model, f"HTTP {status}", status_code=status)


class FakeGateway(ModelGateway):
    """Test double gateway.

    ``scripts`` maps a model id to a list of outcomes consumed one per call:
    a dict is returned as the completion body, an exception is raised. The
    last outcome repeats once the list runs out. ``delays`` adds a per-model
    sleep before answering, to control completion order.
    """

    def __init__(
        self,
        scripts: dict[str, list[Any]] | None = None,
        catalog: list[dict[str, Any]] | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self.scripts = scripts or {}
        self.catalog = catalog or []
        self.delays = delays or {}
        self.calls: list[dict[str, Any]] = []
        self.completed: list[str] = []
        self.catalog_calls = 0

    async def complete(
        self,
        model: str,
        turns: list[ChatTurn],
        max_tokens: int,
        temperature: float | None = None,
    ) -> dict[str, Any]:
        self.calls.append(
            {"model": model, "turns": list(turns), "max_tokens": max_tokens, "temperature": temperature}
        )
        if model in self.delays:
            await asyncio.sleep(self.delays[model])
        script = self.scripts.get(model, [completion_body(f"Response from {model}")])
        outcome = script.pop(0) if len(script) > 1 else script[0]
        self.completed.append(model)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def list_models(self) -> list[dict[str, Any]]:
        self.catalog_calls += 1
        return self.catalog

    def calls_for(self, model: str) -> list[dict[str, Any]]:
        return [c for c in self.calls if c["model"] == model]


@pytest.fixture
def sample_catalog() -> list[dict[str, Any]]:
    return [
        {
            "id": "openai/gpt-4o",
            "name": "OpenAI: GPT-4o",
            "description": "GPT-4o multimodal flagship.",
            "context_length": 128000,
            "pricing": {"prompt": "0.0000025", "completion": "0.00001"},
            "architecture": {"modality": "text+image->text"},
        },
        {
            "id": "deepseek/deepseek-r1:free",
            "name": "DeepSeek: R1 (free)",
            "description": "Reasoning model.",
            "context_length": 163840,
            "pricing": {"prompt": "0", "completion": "0"},
        },
    ]


@pytest.fixture
def fake_gateway(sample_catalog) -> FakeGateway:
    return FakeGateway(catalog=sample_catalog)


@pytest.fixture
def fast_retry() -> RetryConfig:
    """Retry policy with no waiting, so transient-failure tests run instantly."""
    return RetryConfig(max_retries=3, base_delay_ms=0, max_jitter_ms=0)


@pytest.fixture
def sample_app_config(fast_retry: RetryConfig) -> AppConfig:
    return AppConfig(
        gateway=GatewayConfig(
            base_url="https://openrouter.test/api/v1",
            api_key="sk-or-test",
            site_url="http://localhost:3000",
            app_name="Test App",
            timeout_sec=30,
        ),
        retry=fast_retry,
        server=ServerConfig(name="openrouter-mcp-test", version="0.0.1"),
    )
