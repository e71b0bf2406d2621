"""Dataclasses for chat turns, replies, usage and comparison results. No deps."""

from dataclasses import dataclass
from typing import Any, Literal


@dataclass(frozen=True)
class ChatTurn:
    role: Literal["system", "user"]
    content: str

    def to_message(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class NormalizedReply:
    content: str | None      # None when the model returned no text at all
    reasoning: str | None = None


@dataclass(frozen=True)
class UsageStats:
    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None

    @classmethod
    def from_raw(cls, raw: dict[str, Any] | None) -> "UsageStats":
        if not raw:
            return cls()
        return cls(
            prompt_tokens=raw.get("prompt_tokens"),
            completion_tokens=raw.get("completion_tokens"),
            total_tokens=raw.get("total_tokens"),
        )


@dataclass
class ComparisonResult:
    model: str
    success: bool
    reply: NormalizedReply | None = None
    usage: UsageStats | None = None
    error: str | None = None
