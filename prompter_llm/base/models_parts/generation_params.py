"""
Generation parameters resolved once per call.

Defaults are applied when the call is constructed so that the payload, the
log events and the metadata attached to the result all see the same values.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from ..constants import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, DEFAULT_TOP_P


@dataclass(frozen=True)
class GenerationParameters:
    """Sampling parameters for one completion call.

    Attributes:
        temperature: Sampling temperature.
        max_tokens: Maximum completion tokens (renamed per provider shape).
        top_p: Nucleus sampling probability mass.
    """

    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    top_p: float = DEFAULT_TOP_P

    @classmethod
    def resolve(
        cls,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        top_p: Optional[float] = None,
    ) -> "GenerationParameters":
        """Build parameters, substituting defaults for values that are ``None``.

        ``0`` and ``0.0`` are kept as given.
        """
        return cls(
            temperature=DEFAULT_TEMPERATURE if temperature is None else float(temperature),
            max_tokens=DEFAULT_MAX_TOKENS if max_tokens is None else int(max_tokens),
            top_p=DEFAULT_TOP_P if top_p is None else float(top_p),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["GenerationParameters"]
