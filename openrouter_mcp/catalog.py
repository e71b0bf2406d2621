"""Model catalog lookups and the JSON resources built from them."""

import json
import logging
from typing import Any

from openrouter_mcp.gateway.base import ModelGateway, ModelNotFoundError

logger = logging.getLogger(__name__)

_SUMMARY_FIELDS = ("id", "name", "description", "context_length", "pricing")
_PRICING_FIELDS = ("id", "name", "pricing")

USAGE_PLACEHOLDER = {
    "message": "Usage statistics would be available here",
    "note": "OpenRouter doesn't provide a direct usage API endpoint",
}


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _pick(entry: dict[str, Any], fields: tuple[str, ...]) -> dict[str, Any]:
    return {f: entry.get(f) for f in fields}


async def list_models_report(gateway: ModelGateway) -> str:
    models = [_pick(m, _SUMMARY_FIELDS) for m in await gateway.list_models()]
    return f"Found {len(models)} available models:\n\n{to_json(models)}"


async def find_model(gateway: ModelGateway, model: str) -> dict[str, Any]:
    """Return the catalog entry for ``model``.

    Raises:
        ModelNotFoundError: If no entry has that id.
    """
    for entry in await gateway.list_models():
        if entry.get("id") == model:
            return entry
    raise ModelNotFoundError(model)


async def get_model_info(gateway: ModelGateway, model: str) -> str:
    return to_json(await find_model(gateway, model))


async def models_resource(gateway: ModelGateway) -> str:
    return to_json({"data": await gateway.list_models()})


async def pricing_resource(gateway: ModelGateway) -> str:
    return to_json([_pick(m, _PRICING_FIELDS) for m in await gateway.list_models()])


async def usage_resource(gateway: ModelGateway) -> str:
    return to_json(USAGE_PLACEHOLDER)
