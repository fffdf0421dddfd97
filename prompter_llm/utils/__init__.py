"""Small standalone helpers."""

from .string_format import format_string, format_string_advanced

__all__ = ["format_string", "format_string_advanced"]
