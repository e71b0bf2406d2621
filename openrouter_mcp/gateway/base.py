"""Abstract base for the remote model-routing gateway."""

from abc import ABC, abstractmethod
from typing import Any

from openrouter_mcp.models import ChatTurn


class ProviderError(Exception):
    """Raised when a gateway call fails.

    ``status_code`` is the HTTP status when the provider answered, None for
    network failures and timeouts.
    """

    def __init__(self, model: str, message: str, status_code: int | None = None) -> None:
        self.model = model
        self.message = message
        self.status_code = status_code
        super().__init__(f"[{model}] {message}")


class ModelNotFoundError(Exception):
    """Raised when a model identifier is absent from the catalog."""

    def __init__(self, model: str) -> None:
        self.model = model
        super().__init__(f"Model {model} not found")


class ModelGateway(ABC):
    """Remote API serving the model catalog and chat completions."""

    @abstractmethod
    async def complete(
        self,
        model: str,
        turns: list[ChatTurn],
        max_tokens: int,
        temperature: float | None = None,
    ) -> dict[str, Any]:
        """Run one chat completion.

        Args:
            model: Vendor-prefixed model identifier (e.g. 'openai/gpt-4o').
            turns: Conversation to send, system turn first when present.
            max_tokens: Completion token cap.
            temperature: Sampling temperature; omitted from the request when None.

        Returns:
            Raw completion body as a dict (``choices``, ``usage``, ...).

        Raises:
            ProviderError: On API failure, timeout, or network error.
        """
        ...

    @abstractmethod
    async def list_models(self) -> list[dict[str, Any]]:
        """Return the raw catalog entries from ``GET /models``."""
        ...
