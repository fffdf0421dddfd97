"""Schema-constrained completion: output shapes, translator and cell helpers."""

from .shape import FieldSpec, ShapeDescriptor, shape
from .translator import JsonTranslator
from .cells import PROMPT_CELL_SHAPE, build_enhance_prompt, enhance_cell_shape
from .content_format import detect_format, to_markdown, to_plaintext, validate_chat_response

__all__ = [
    "FieldSpec",
    "ShapeDescriptor",
    "shape",
    "JsonTranslator",
    "PROMPT_CELL_SHAPE",
    "build_enhance_prompt",
    "enhance_cell_shape",
    "detect_format",
    "to_markdown",
    "to_plaintext",
    "validate_chat_response",
]
