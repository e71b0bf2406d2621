"""MCP server exposing OpenRouter as tools and resources over stdio."""

import logging
from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from pydantic import AnyUrl

from config.config_loader import AppConfig
from openrouter_mcp.catalog import (
    get_model_info,
    list_models_report,
    models_resource,
    pricing_resource,
    usage_resource,
)
from openrouter_mcp.chat import chat_with_model
from openrouter_mcp.compare import compare_models
from openrouter_mcp.gateway.base import ModelGateway
from openrouter_mcp.gateway.openrouter import OpenRouterGateway
from openrouter_mcp.tools import (
    MODELS_URI,
    PRICING_URI,
    RESOURCES,
    USAGE_URI,
    ChatArgs,
    CompareArgs,
    ModelInfoArgs,
    tool_definitions,
)

logger = logging.getLogger(__name__)


class OpenRouterMCPServer:
    """Routes MCP tool calls and resource reads to the OpenRouter gateway."""

    def __init__(self, config: AppConfig, gateway: ModelGateway | None = None) -> None:
        self.config = config
        self.gateway = gateway or OpenRouterGateway(config.gateway)
        self.server = Server(config.server.name)
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        self.server.list_tools()(self.list_tools)
        # Arguments are validated by the pydantic models in dispatch_tool, so
        # schema errors come back as "Error executing ..." text like any other.
        self.server.call_tool(validate_input=False)(self.call_tool)
        self.server.list_resources()(self.list_resources)
        self.server.read_resource()(self.read_resource)

    async def list_tools(self) -> list[types.Tool]:
        return tool_definitions()

    async def list_resources(self) -> list[types.Resource]:
        return RESOURCES

    async def dispatch_tool(self, name: str, arguments: dict[str, Any] | None) -> str:
        """Validate arguments and run the named tool.

        Raises:
            ValueError: Unknown tool name.
            pydantic.ValidationError: Arguments do not match the tool schema.
        """
        args = arguments or {}
        retry = self.config.retry
        if name == "list_models":
            return await list_models_report(self.gateway)
        if name == "chat_with_model":
            chat = ChatArgs.model_validate(args)
            return await chat_with_model(self.gateway, retry=retry, **chat.model_dump())
        if name == "compare_models":
            compare = CompareArgs.model_validate(args)
            return await compare_models(self.gateway, retry=retry, **compare.model_dump())
        if name == "get_model_info":
            info = ModelInfoArgs.model_validate(args)
            return await get_model_info(self.gateway, info.model)
        raise ValueError(f"Unknown tool: {name}")

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        """Run a tool; failures are reported as text instead of a protocol error."""
        try:
            text = await self.dispatch_tool(name, arguments)
        except Exception as exc:
            logger.error("Tool %s error: %s", name, exc)
            text = f"Error executing {name}: {exc}"
        return [types.TextContent(type="text", text=text)]

    async def read_resource_text(self, uri: str) -> str:
        key = uri.rstrip("/")
        if key == MODELS_URI:
            return await models_resource(self.gateway)
        if key == PRICING_URI:
            return await pricing_resource(self.gateway)
        if key == USAGE_URI:
            return await usage_resource(self.gateway)
        raise ValueError(f"Unknown resource: {uri}")

    async def read_resource(self, uri: AnyUrl | str) -> list[ReadResourceContents]:
        try:
            text = await self.read_resource_text(str(uri))
        except Exception as exc:
            raise ValueError(f"Failed to read resource {uri}: {exc}") from exc
        return [ReadResourceContents(content=text, mime_type="application/json")]

    async def run(self) -> None:
        init_options = InitializationOptions(
            server_name=self.config.server.name,
            server_version=self.config.server.version,
            capabilities=types.ServerCapabilities(
                tools=types.ToolsCapability(),
                resources=types.ResourcesCapability(),
            ),
        )
        async with stdio_server() as (read_stream, write_stream):
            logger.info("%s running on stdio", self.config.server.name)
            await self.server.run(read_stream, write_stream, init_options)
