"""Schema-constrained JSON translation over an :class:`LLMClient`.

Flow for one ``translate`` call::

    prompt -> request text (shape rendered as a TypeScript interface)
           -> LLMClient.complete([user message])
           -> JSON object between the first "{" and the last "}"
           -> ShapeDescriptor.validate
           -> WrappedChatResponse(TranslationSuccess | TranslationFailure)

Failure semantics:
    - Text that is not JSON, or JSON that does not fit the shape, yields a
      ``TranslationFailure``. It is returned, not raised.
    - Registry, configuration, transport and extraction errors propagate as
      ``ProviderError`` subclasses after a ``translate.error`` event.

With ``attempt_repair=True`` a failed validation triggers one follow-up
round trip that shows the model its previous reply and the validation error.
"""

from __future__ import annotations

import json
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from ..base.client import LLMClient
from ..base.errors import ProviderError, TranslationValidationError
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import (
    CompletionResult,
    Message,
    StructuredTranslationResult,
    TranslationFailure,
    TranslationSuccess,
    WrappedChatResponse,
)
from .shape import ShapeDescriptor


def _extract_json_text(text: str) -> Optional[str]:
    start = text.find("{")
    end = text.rfind("}")
    if start < 0 or end < start:
        return None
    return text[start : end + 1]


class JsonTranslator:
    """Translate natural-language requests into objects of one shape."""

    def __init__(self, client: LLMClient, shape: ShapeDescriptor, *, attempt_repair: bool = False) -> None:
        self._client = client
        self._shape = shape
        self._attempt_repair = attempt_repair
        self._logger = get_logger("prompter.translator")

    @property
    def shape(self) -> ShapeDescriptor:
        return self._shape

    def create_request_prompt(self, request: str) -> str:
        schema = self._shape.render()
        return (
            f'You are a service that translates user requests into JSON objects of type "{self._shape.name}" '
            "according to the following TypeScript definitions:\n"
            f"```\n{schema}\n```\n"
            "The following is a user request:\n"
            f'"""\n{request}\n"""\n'
            "The following is the user request translated into a JSON object with 2 spaces of indentation "
            "and no properties with the value undefined:\n"
        )

    @staticmethod
    def create_repair_prompt(validation_error: str) -> str:
        return (
            "The JSON object is invalid for the following reason:\n"
            f'"""\n{validation_error}\n"""\n'
            "The following is a revised JSON object:\n"
        )

    def validate_text(self, text: str) -> StructuredTranslationResult[Dict[str, Any]]:
        """Parse and validate raw completion text; never raises for bad input."""
        json_text = _extract_json_text(text)
        if json_text is None:
            return TranslationFailure(f"Response is not JSON:\n{text}")
        try:
            obj = json.loads(json_text)
        except json.JSONDecodeError as e:
            return TranslationFailure(f"Response is not valid JSON: {e.msg}\n{json_text}")
        except RecursionError:
            return TranslationFailure("Response is not valid JSON: nesting too deep")
        try:
            return TranslationSuccess(self._shape.validate(obj))
        except TranslationValidationError as e:
            return TranslationFailure(e.message)

    async def _round_trip(
        self, messages: List[Message]
    ) -> Tuple[CompletionResult, StructuredTranslationResult[Dict[str, Any]]]:
        completion = await self._client.complete(messages)
        return completion, self.validate_text(completion.content)

    async def translate(self, prompt: str) -> WrappedChatResponse[Dict[str, Any]]:
        """Translate ``prompt`` into an object of this translator's shape.

        Raises:
            ProviderError: Any failure below the validation step.
        """
        client = self._client
        ctx = LogContext(
            provider=client.provider_id,
            model=client.model,
            request_shape=client.profile.request_shape.value,
            extra={"shape": self._shape.name},
        )
        start_time = datetime.now(timezone.utc)
        t0 = time.perf_counter()
        normalized_log_event(
            self._logger,
            "translate.start",
            ctx,
            phase="start",
            emitted=False,
            tokens=None,
            prompt_chars=len(prompt),
        )

        messages = [Message.user(self.create_request_prompt(prompt))]
        attempt = 0
        try:
            completion, result = await self._round_trip(messages)
            if isinstance(result, TranslationFailure) and self._attempt_repair:
                attempt = 1
                messages = messages + [
                    Message.assistant(completion.content),
                    Message.user(self.create_repair_prompt(result.message)),
                ]
                completion, result = await self._round_trip(messages)
        except ProviderError as e:
            normalized_log_event(
                self._logger,
                "translate.error",
                ctx,
                phase="finalize",
                attempt=attempt,
                error_code=e.code.value,
                emitted=False,
                tokens=None,
                duration_ms=round((time.perf_counter() - t0) * 1000.0, 3),
                error=e.message,
            )
            raise

        duration_ms = round((time.perf_counter() - t0) * 1000.0, 3)
        end_time = datetime.now(timezone.utc)
        normalized_log_event(
            self._logger,
            "translate.end",
            ctx,
            phase="finalize",
            attempt=attempt,
            emitted=result.success,
            tokens=completion.usage,
            duration_ms=duration_ms,
            failure=None if result.success else result.message,
        )
        params = client.params
        return WrappedChatResponse(
            data=result,
            provider_used=client.provider_id,
            model_used=client.model,
            start_time=start_time,
            end_time=end_time,
            duration_ms=duration_ms,
            temperature=params.temperature,
            max_tokens=params.max_tokens,
            top_p=params.top_p,
            usage=completion.usage,
        )


__all__ = ["JsonTranslator"]
