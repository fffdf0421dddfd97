"""Placeholder substitution for prompt templates.

Both helpers replace ``{key}`` occurrences and leave unknown placeholders
untouched, so templates that contain literal braces (JSON examples, code)
survive a partial substitution.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Sequence, Union

_PLACEHOLDER = re.compile(r"\{([^}]+)\}")
_LEADING_INT = re.compile(r"^[+-]?\d+")

_MISSING = object()


def format_string(template: str, values: Mapping[str, Any]) -> str:
    """Replace ``{key}`` with ``str(values[key])``.

    >>> format_string("Hello {name}, you are {age} years old!", {"name": "John", "age": 25})
    'Hello John, you are 25 years old!'
    """

    def _sub(match: re.Match) -> str:
        key = match.group(1)
        return str(values[key]) if key in values else match.group(0)

    return _PLACEHOLDER.sub(_sub, template)


def _lookup(values: Union[Mapping[Any, Any], Sequence[Any]], key: str) -> Any:
    if isinstance(values, Mapping):
        if key in values:
            return values[key]
        if key.isdigit() and int(key) in values:
            return values[int(key)]
        return _MISSING
    m = _LEADING_INT.match(key)
    if not m:
        return _MISSING
    index = int(m.group(0))
    if 0 <= index < len(values):
        return values[index]
    return _MISSING


def format_string_advanced(template: str, values: Union[Mapping[Any, Any], Sequence[Any]]) -> str:
    """Replace ``{key}`` or positional ``{0}`` placeholders.

    Keys are stripped of surrounding whitespace (including newlines). With a
    sequence, keys are read as indices; with a mapping, a numeric key also
    matches an ``int`` entry.

    >>> format_string_advanced("Hello {0}, you are {1} years old!", ["John", 25])
    'Hello John, you are 25 years old!'
    >>> format_string_advanced("User: {name}, Status: {0}", {"name": "John", 0: "Active"})
    'User: John, Status: Active'
    """
    if isinstance(values, (str, bytes)):
        raise TypeError("values must be a mapping or a non-string sequence")

    def _sub(match: re.Match) -> str:
        value = _lookup(values, match.group(1).strip())
        return match.group(0) if value is _MISSING else str(value)

    return _PLACEHOLDER.sub(_sub, template)


__all__ = ["format_string", "format_string_advanced"]
