"""Load settings.yaml into typed dataclasses. Environment overrides gateway values."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

_SETTINGS_PATH = Path(__file__).parent / "settings.yaml"

_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"


@dataclass(frozen=True)
class GatewayConfig:
    base_url: str
    api_key: str
    site_url: str
    app_name: str
    timeout_sec: float

    def headers(self) -> dict[str, str]:
        """Attribution headers sent with every request."""
        return {
            "HTTP-Referer": self.site_url,
            "X-Title": self.app_name,
        }


@dataclass(frozen=True)
class RetryConfig:
    max_retries: int = 3
    base_delay_ms: int = 1000
    max_jitter_ms: int = 1000
    retry_on_status: frozenset[int] = frozenset({429, 402})


@dataclass(frozen=True)
class ServerConfig:
    name: str = "openrouter-mcp-server"
    version: str = "1.0.0"


@dataclass(frozen=True)
class AppConfig:
    gateway: GatewayConfig
    retry: RetryConfig = field(default_factory=RetryConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


def load_config(settings_path: Path = _SETTINGS_PATH) -> AppConfig:
    """Load configuration from settings.yaml, then apply environment overrides.

    Raises FileNotFoundError if settings file missing.
    A missing API key is logged as a warning but does not raise — the
    gateway is still built and calls fail with the provider's 401.
    """
    if not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    with settings_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    gateway_raw = raw.get("gateway", {})
    api_key_env = gateway_raw.get("api_key_env", "OPENROUTER_API_KEY")
    api_key = os.environ.get(api_key_env, "").strip()
    if not api_key:
        logger.warning(
            "%s is not set — requests to OpenRouter will be rejected. Set it in .env",
            api_key_env,
        )

    gateway = GatewayConfig(
        base_url=os.environ.get("OPENROUTER_BASE_URL") or gateway_raw.get("base_url", _DEFAULT_BASE_URL),
        api_key=api_key,
        site_url=os.environ.get("OPENROUTER_SITE_URL") or gateway_raw.get("site_url", "http://localhost:3000"),
        app_name=os.environ.get("OPENROUTER_APP_NAME") or gateway_raw.get("app_name", "OpenRouter MCP Server"),
        timeout_sec=float(gateway_raw.get("timeout_sec", 120)),
    )

    retry_raw = raw.get("retry", {})
    retry = RetryConfig(
        max_retries=int(retry_raw.get("max_retries", 3)),
        base_delay_ms=int(retry_raw.get("base_delay_ms", 1000)),
        max_jitter_ms=int(retry_raw.get("max_jitter_ms", 1000)),
        retry_on_status=frozenset(int(s) for s in retry_raw.get("retry_on_status") or [429, 402]),
    )
    if retry.max_retries < 0:
        raise ValueError(f"retry.max_retries must be >= 0, got {retry.max_retries}")

    server_raw = raw.get("server", {})
    server = ServerConfig(
        name=str(server_raw.get("name", "openrouter-mcp-server")),
        version=str(server_raw.get("version", "1.0.0")),
    )

    logger.debug("Gateway base URL: %s", gateway.base_url)
    return AppConfig(gateway=gateway, retry=retry, server=server)
