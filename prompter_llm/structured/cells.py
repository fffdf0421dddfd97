"""Output shapes and prompts used by notebook cells."""

from __future__ import annotations

from typing import Optional

from ..utils.string_format import format_string
from .shape import FieldSpec, ShapeDescriptor

PROMPT_CELL_SHAPE = ShapeDescriptor(
    name="PromptCellChatResponse",
    fields=(
        FieldSpec(
            name="format",
            enum=("plaintext", "markdown"),
            description="the best display method for the response content.",
        ),
        FieldSpec(
            name="tags",
            type="array",
            items="string",
            required=False,
            max_items=3,
            description=(
                "0 to 3 tags, each a single word of at most 15 characters that summarizes the "
                "response. The most relevant tag comes first."
            ),
        ),
        FieldSpec(name="response", description="the request's response."),
    ),
)

_ENHANCE_RESPONSE_HINT = "the request's response content, it should be {contentType}."

_PROMPT_ENHANCE_TEMPLATE = """I need your help to improve the following prompt content. Please optimize according to these requirements:

1. Content Clarity
   - Make expressions clearer and more specific
   - Eliminate any vague or ambiguous statements
   - Ensure each point is clear and easy to understand

2. Structure Optimization
   - Improve overall structure and logical flow
   - Add appropriate sections and hierarchy
   - Ensure natural transitions between sections

3. Detail Enhancement
   - Add necessary contextual information
   - Include relevant examples or explanations
   - Maintain original intent and style

Original prompt content:
{content}

Please provide an optimized version of the prompt content based on the above requirements and only show the optimized prompt content."""

_CODE_ENHANCE_TEMPLATE = (
    "Please help me improve the following {language} code by adding necessary comments, "
    "optimizing code structure, and supplementing missing functionality to make it more "
    "complete and standardized:\n\n```{language}\n{content}\n```"
)

_MARKDOWN_ENHANCE_TEMPLATE = (
    "Please help me improve the following markdown content by enhancing its structure, "
    "adding details, and optimizing expressions to make it more complete and professional:\n\n{content}"
)


def enhance_cell_shape(content_type: str) -> ShapeDescriptor:
    """Return the single-field shape for an enhanced cell of ``content_type``.

    ``content_type`` is descriptive text such as ``"markdown"`` or
    ``"python code"``; it only appears in the field hint.
    """
    return ShapeDescriptor(
        name="EnhanceCellChatResponse",
        fields=(
            FieldSpec(
                name="response",
                description=format_string(_ENHANCE_RESPONSE_HINT, {"contentType": content_type}),
            ),
        ),
    )


def build_enhance_prompt(content: str, language_id: Optional[str], kind: str) -> tuple[str, str]:
    """Return ``(prompt, content_type)`` for enhancing one cell.

    Args:
        content: Current cell text.
        language_id: Cell language, e.g. ``"python"`` or ``"prompt"``.
        kind: ``"code"`` or ``"markup"``.

    Raises:
        ValueError: ``content`` is blank or ``kind`` is unknown.
    """
    if not content or not content.strip():
        raise ValueError("Cell is empty, nothing to enhance")
    if kind == "code":
        if language_id == "prompt":
            return _PROMPT_ENHANCE_TEMPLATE.replace("{content}", content), "plain text"
        language = language_id or "plain"
        prompt = _CODE_ENHANCE_TEMPLATE.replace("{language}", language).replace("{content}", content)
        return prompt, f"{language} code"
    if kind == "markup":
        return _MARKDOWN_ENHANCE_TEMPLATE.replace("{content}", content), "markdown"
    raise ValueError(f"Unknown cell kind: {kind}")


__all__ = ["PROMPT_CELL_SHAPE", "enhance_cell_shape", "build_enhance_prompt"]
