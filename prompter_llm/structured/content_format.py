"""Display-format helpers for raw chat responses.

``detect_format`` decides whether a completion should be rendered as markdown
or as plain text. ``to_plaintext`` strips markdown syntax and ``to_markdown``
escapes plain text so it renders literally inside a markdown output.
"""

from __future__ import annotations

import re
from typing import Any, Literal, Mapping

ContentFormat = Literal["plaintext", "markdown"]

_MARKDOWN_PATTERNS = (
    re.compile(r"^#{1,6}\s", re.MULTILINE),  # headers
    re.compile(r"\*\*.*\*\*"),  # bold
    re.compile(r"\*.*\*"),  # italic
    re.compile(r"```[\s\S]*```"),  # fenced code
    re.compile(r"`.*`"),  # inline code
    re.compile(r"^\s*[-*+]\s", re.MULTILINE),  # lists
    re.compile(r"\[.*\]\(.*\)"),  # links
)

_FENCE = re.compile(r"```[^\n]*\n?([\s\S]*?)```")
_HEADER = re.compile(r"^#{1,6}\s+", re.MULTILINE)
_BOLD = re.compile(r"(\*\*|__)(.+?)\1")
_ITALIC = re.compile(r"(?<![\w*])([*_])(?!\s)(.+?)(?<!\s)\1(?![\w*])")
_INLINE_CODE = re.compile(r"`([^`]*)`")
_LINK = re.compile(r"!?\[([^\]]*)\]\([^)]*\)")
_LIST_MARKER = re.compile(r"^(\s*)[-*+]\s+", re.MULTILINE)
_BLOCKQUOTE = re.compile(r"^\s*>\s?", re.MULTILINE)

_MD_SPECIAL = re.compile(r"([\\`*_{}\[\]()#+\-!|>])")


def detect_format(content: str) -> ContentFormat:
    """Return ``"markdown"`` when any common markdown construct is present."""
    if any(p.search(content or "") for p in _MARKDOWN_PATTERNS):
        return "markdown"
    return "plaintext"


def to_plaintext(content: str) -> str:
    """Strip markdown syntax, keeping the visible text."""
    text = _FENCE.sub(lambda m: m.group(1).rstrip("\n"), content or "")
    text = _HEADER.sub("", text)
    text = _LINK.sub(r"\1", text)
    text = _BOLD.sub(r"\2", text)
    text = _ITALIC.sub(r"\2", text)
    text = _INLINE_CODE.sub(r"\1", text)
    text = _LIST_MARKER.sub(r"\1", text)
    text = _BLOCKQUOTE.sub("", text)
    return text


def to_markdown(content: str, source_format: ContentFormat = "plaintext") -> str:
    """Return ``content`` ready to embed in a markdown output.

    Markdown passes through unchanged. Plain text has markdown control
    characters escaped and single newlines turned into hard line breaks.
    """
    if source_format == "markdown":
        return content
    escaped = _MD_SPECIAL.sub(r"\\\1", content or "")
    return re.sub(r"(?<!\n)\n(?!\n)", "  \n", escaped)


def validate_chat_response(obj: Any) -> bool:
    """Return True if ``obj`` has the shape of a chat response mapping.

    Required: ``format`` in ``{"plaintext", "markdown"}``, ``content`` string,
    ``success`` bool. Optional: ``error``/``model``/``provider`` strings and a
    ``usage`` mapping of non-negative integers keyed by ``prompt_tokens``,
    ``completion_tokens`` and ``total_tokens``.
    """
    if not isinstance(obj, Mapping):
        return False
    if obj.get("format") not in ("plaintext", "markdown"):
        return False
    if not isinstance(obj.get("content"), str) or not isinstance(obj.get("success"), bool):
        return False
    for key in ("error", "model", "provider"):
        if obj.get(key) is not None and not isinstance(obj[key], str):
            return False
    usage = obj.get("usage")
    if usage is None:
        return True
    if not isinstance(usage, Mapping):
        return False
    for key in ("prompt_tokens", "completion_tokens", "total_tokens"):
        val = usage.get(key)
        if val is None:
            continue
        if isinstance(val, bool) or not isinstance(val, int) or val < 0:
            return False
    return True


__all__ = [
    "ContentFormat",
    "detect_format",
    "to_plaintext",
    "to_markdown",
    "validate_chat_response",
]
