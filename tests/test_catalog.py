"""Tests for openrouter_mcp/catalog.py."""

import json

import pytest

from openrouter_mcp.catalog import (
    USAGE_PLACEHOLDER,
    find_model,
    get_model_info,
    list_models_report,
    models_resource,
    pricing_resource,
    usage_resource,
)
from openrouter_mcp.gateway.base import ModelNotFoundError, ProviderError


async def test_list_models_report(fake_gateway):
    report = await list_models_report(fake_gateway)
    header, body = report.split("\n\n", 1)
    assert header == "Found 2 available models:"
    models = json.loads(body)
    assert models[0] == {
        "id": "openai/gpt-4o",
        "name": "OpenAI: GPT-4o",
        "description": "GPT-4o multimodal flagship.",
        "context_length": 128000,
        "pricing": {"prompt": "0.0000025", "completion": "0.00001"},
    }
    # Only the summary fields are reported
    assert "architecture" not in models[0]


async def test_get_model_info_returns_full_entry(fake_gateway):
    info = json.loads(await get_model_info(fake_gateway, "openai/gpt-4o"))
    assert info["architecture"] == {"modality": "text+image->text"}


async def test_get_model_info_unknown_model(fake_gateway):
    with pytest.raises(ModelNotFoundError, match="Model nope/none not found"):
        await find_model(fake_gateway, "nope/none")


def test_not_found_is_not_a_provider_error():
    assert not issubclass(ModelNotFoundError, ProviderError)


async def test_models_resource_wraps_catalog(fake_gateway, sample_catalog):
    data = json.loads(await models_resource(fake_gateway))
    assert data == {"data": sample_catalog}


async def test_pricing_resource(fake_gateway):
    pricing = json.loads(await pricing_resource(fake_gateway))
    assert pricing[1] == {
        "id": "deepseek/deepseek-r1:free",
        "name": "DeepSeek: R1 (free)",
        "pricing": {"prompt": "0", "completion": "0"},
    }


async def test_usage_resource_is_placeholder(fake_gateway):
    assert json.loads(await usage_resource(fake_gateway)) == USAGE_PLACEHOLDER
    assert fake_gateway.catalog_calls == 0


async def test_catalog_is_fetched_on_every_call(fake_gateway):
    await list_models_report(fake_gateway)
    await get_model_info(fake_gateway, "openai/gpt-4o")
    assert fake_gateway.catalog_calls == 2
