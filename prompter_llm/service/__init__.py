"""Service entry points for the notebook layer."""

from .executor import execute_cell_prompt, execute_enhance_cell
from .formatter import ChatResponse, ChatResponseFormatter, FormatterRegistry, setup_common_providers

__all__ = [
    "execute_cell_prompt",
    "execute_enhance_cell",
    "ChatResponse",
    "ChatResponseFormatter",
    "FormatterRegistry",
    "setup_common_providers",
]
