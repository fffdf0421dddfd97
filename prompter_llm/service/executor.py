"""Entry points called by the notebook cell runner.

``execute_cell_prompt`` resolves settings, builds a client for the active
provider and runs one schema-constrained translation. Thrown errors are
``ProviderError`` subclasses with a one-line ``str()``; a returned
``TranslationFailure`` means the model reply did not fit the shape.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from ..base.client import LLMClient
from ..base.models import WrappedChatResponse
from ..config import LLMSettings, load_settings
from ..structured.cells import PROMPT_CELL_SHAPE, build_enhance_prompt, enhance_cell_shape
from ..structured.shape import ShapeDescriptor
from ..structured.translator import JsonTranslator


def _client_for(
    client: Optional[LLMClient],
    settings: Optional[LLMSettings],
    http_client: Optional[httpx.AsyncClient],
) -> LLMClient:
    if client is not None:
        return client
    return LLMClient.from_config(settings or load_settings(), http_client=http_client)


async def execute_cell_prompt(
    prompt: str,
    shape: ShapeDescriptor = PROMPT_CELL_SHAPE,
    *,
    settings: Optional[LLMSettings] = None,
    client: Optional[LLMClient] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    attempt_repair: bool = False,
) -> WrappedChatResponse[Dict[str, Any]]:
    """Translate ``prompt`` into ``shape`` with the configured provider.

    ``client`` wins over ``settings``; without either, settings are loaded
    with :func:`load_settings`.
    """
    translator = JsonTranslator(_client_for(client, settings, http_client), shape, attempt_repair=attempt_repair)
    return await translator.translate(prompt)


async def execute_enhance_cell(
    content: str,
    language_id: Optional[str],
    kind: str,
    *,
    settings: Optional[LLMSettings] = None,
    client: Optional[LLMClient] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> WrappedChatResponse[Dict[str, Any]]:
    """Ask the model for an improved version of one cell's content."""
    prompt, content_type = build_enhance_prompt(content, language_id, kind)
    return await execute_cell_prompt(
        prompt,
        enhance_cell_shape(content_type),
        settings=settings,
        client=client,
        http_client=http_client,
    )


__all__ = ["execute_cell_prompt", "execute_enhance_cell"]
