"""Tool argument schemas and the tool/resource catalog advertised to clients."""

import mcp.types as types
from pydantic import BaseModel, ConfigDict, Field


class ListModelsArgs(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ChatArgs(BaseModel):
    model: str = Field(description="OpenRouter model ID (e.g., 'openai/gpt-4')")
    message: str = Field(description="Message to send to the model")
    max_tokens: int = Field(default=1000, gt=0, description="Maximum tokens in response")
    temperature: float = Field(default=0.7, ge=0, le=2, description="Temperature for response randomness")
    system_prompt: str | None = Field(default=None, description="System prompt for the conversation")


class CompareArgs(BaseModel):
    models: list[str] = Field(min_length=1, description="Array of model IDs to compare")
    message: str = Field(description="Message to send to all models")
    max_tokens: int = Field(default=500, gt=0, description="Maximum tokens per response")


class ModelInfoArgs(BaseModel):
    model: str = Field(description="Model ID to get information about")


TOOL_ARGS: dict[str, tuple[type[BaseModel], str]] = {
    "list_models": (ListModelsArgs, "Get list of available OpenRouter models"),
    "chat_with_model": (ChatArgs, "Send a message to a specific OpenRouter model"),
    "compare_models": (CompareArgs, "Compare responses from multiple models"),
    "get_model_info": (ModelInfoArgs, "Get detailed information about a specific model"),
}

MODELS_URI = "openrouter://models"
PRICING_URI = "openrouter://pricing"
USAGE_URI = "openrouter://usage"

RESOURCES: list[types.Resource] = [
    types.Resource(
        uri=MODELS_URI,
        name="Available Models",
        description="List of all available OpenRouter models with pricing",
        mimeType="application/json",
    ),
    types.Resource(
        uri=PRICING_URI,
        name="Model Pricing",
        description="Current pricing information for all models",
        mimeType="application/json",
    ),
    types.Resource(
        uri=USAGE_URI,
        name="Usage Statistics",
        description="Your OpenRouter usage statistics",
        mimeType="application/json",
    ),
]


def tool_definitions() -> list[types.Tool]:
    return [
        types.Tool(name=name, description=description, inputSchema=schema.model_json_schema())
        for name, (schema, description) in TOOL_ARGS.items()
    ]
