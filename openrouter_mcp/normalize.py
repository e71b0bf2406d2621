"""Extract a uniform content/reasoning pair from provider message shapes.

Providers behind OpenRouter disagree on what ``choices[0].message`` looks
like: ``content`` may be missing, a plain string, or a list of typed parts
(``[{"type": "text", "text": "..."}, {"type": "image_url", ...}]``), and
reasoning models add their deliberation in a side field. Parsing is lenient;
an unrecognized shape yields no content rather than an error.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from openrouter_mcp.models import NormalizedReply

# DeepSeek uses reasoning_content, OpenRouter's unified field is reasoning.
_REASONING_FIELDS = ("reasoning_content", "reasoning")


class ContentShape(Enum):
    ABSENT = "absent"
    TEXT = "text"
    PARTS = "parts"
    UNRECOGNIZED = "unrecognized"


def classify_content(content: Any) -> ContentShape:
    if content is None:
        return ContentShape.ABSENT
    if isinstance(content, str):
        return ContentShape.TEXT
    if isinstance(content, list | tuple):
        return ContentShape.PARTS
    return ContentShape.UNRECOGNIZED


def _join_text_parts(parts: list[Any]) -> str | None:
    texts = [
        part["text"]
        for part in parts
        if isinstance(part, Mapping) and part.get("type") == "text" and isinstance(part.get("text"), str)
    ]
    # Empty join collapses to None so callers can tell "nothing" from "".
    return "".join(texts) or None


def _extract_reasoning(message: Mapping[str, Any]) -> str | None:
    for field_name in _REASONING_FIELDS:
        value = message.get(field_name)
        if isinstance(value, str) and value:
            return value
    return None


def normalize_message(message: Mapping[str, Any] | None) -> NormalizedReply:
    """Normalize a raw provider message into a NormalizedReply.

    Args:
        message: The ``choices[0].message`` mapping of a chat completion.

    Returns:
        NormalizedReply whose ``content`` is None when no text was returned.
    """
    if not isinstance(message, Mapping):
        return NormalizedReply(content=None)

    reasoning = _extract_reasoning(message)
    content = message.get("content")
    shape = classify_content(content)

    if shape is ContentShape.TEXT:
        text = content
    elif shape is ContentShape.PARTS:
        text = _join_text_parts(list(content))
    else:
        text = None

    return NormalizedReply(content=text, reasoning=reasoning)
