"""Click CLI — runs the MCP server, or calls the tools directly from a terminal."""

import asyncio
import logging
import sys
from collections.abc import Awaitable

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from config.config_loader import AppConfig, load_config
from openrouter_mcp.catalog import get_model_info
from openrouter_mcp.chat import chat_with_model
from openrouter_mcp.compare import compare_models
from openrouter_mcp.gateway.base import ModelGateway
from openrouter_mcp.gateway.openrouter import OpenRouterGateway
from openrouter_mcp.output import print_json, print_models_table, print_report
from openrouter_mcp.server import OpenRouterMCPServer

logger = logging.getLogger(__name__)

# stdout carries the MCP protocol, so everything human-facing goes to stderr.
err_console = Console(stderr=True, legacy_windows=False)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True, show_path=False)],
    )
    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def _build_gateway(config: AppConfig) -> ModelGateway:
    return OpenRouterGateway(config.gateway)


def _run_or_exit(coro: Awaitable[str]) -> str:
    try:
        return asyncio.run(coro)
    except Exception as exc:
        err_console.print(f"[bold red]Error:[/bold red] {exc}")
        sys.exit(1)


@click.group(invoke_without_command=True)
@click.option("--verbose", is_flag=True, help="Enable DEBUG-level logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """OpenRouter MCP server -- many hosted models behind one set of tools.

    \b
    Examples:
      openrouter-mcp                      # serve over stdio
      openrouter-mcp models
      openrouter-mcp chat openai/gpt-4o "Explain CRDTs in one paragraph"
      openrouter-mcp compare "Tabs or spaces?" -m openai/gpt-4o -m anthropic/claude-3.5-sonnet
      openrouter-mcp info deepseek/deepseek-r1
    """
    load_dotenv()
    _setup_logging(verbose)

    try:
        config = load_config()
    except (FileNotFoundError, ValueError) as exc:
        err_console.print(f"[bold red]Config error:[/bold red] {exc}")
        sys.exit(1)

    ctx.obj = config
    if ctx.invoked_subcommand is None:
        ctx.invoke(serve)


@main.command()
@click.pass_obj
def serve(config: AppConfig) -> None:
    """Run the MCP server on stdio."""
    server = OpenRouterMCPServer(config, gateway=_build_gateway(config))
    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        logger.info("Shutting down")


@main.command()
@click.pass_obj
def models(config: AppConfig) -> None:
    """List available models."""
    gateway = _build_gateway(config)
    try:
        entries = asyncio.run(gateway.list_models())
    except Exception as exc:
        err_console.print(f"[bold red]Error:[/bold red] {exc}")
        sys.exit(1)
    print_models_table(entries)


@main.command()
@click.argument("model")
@click.argument("message")
@click.option("--max-tokens", default=1000, show_default=True, type=int, help="Maximum tokens in response")
@click.option("--temperature", default=0.7, show_default=True, type=float, help="Sampling temperature")
@click.option("--system", "system_prompt", default=None, help="System prompt for the conversation")
@click.pass_obj
def chat(
    config: AppConfig,
    model: str,
    message: str,
    max_tokens: int,
    temperature: float,
    system_prompt: str | None,
) -> None:
    """Send MESSAGE to MODEL."""
    report = _run_or_exit(
        chat_with_model(
            _build_gateway(config),
            model=model,
            message=message,
            max_tokens=max_tokens,
            temperature=temperature,
            system_prompt=system_prompt,
            retry=config.retry,
        )
    )
    print_report(report)


@main.command()
@click.argument("message")
@click.option("-m", "--model", "model_ids", multiple=True, required=True, help="Model ID (repeatable)")
@click.option("--max-tokens", default=500, show_default=True, type=int, help="Maximum tokens per response")
@click.pass_obj
def compare(config: AppConfig, message: str, model_ids: tuple[str, ...], max_tokens: int) -> None:
    """Send MESSAGE to several models in parallel and compare the replies."""
    report = _run_or_exit(
        compare_models(
            _build_gateway(config),
            list(model_ids),
            message,
            max_tokens=max_tokens,
            retry=config.retry,
        )
    )
    print_report(report)


@main.command()
@click.argument("model")
@click.pass_obj
def info(config: AppConfig, model: str) -> None:
    """Show the catalog entry for MODEL."""
    print_json(_run_or_exit(get_model_info(_build_gateway(config), model)))


if __name__ == "__main__":
    main()
