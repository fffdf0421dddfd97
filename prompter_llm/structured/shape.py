"""Declarative output shapes for structured translation.

A :class:`ShapeDescriptor` lists the fields a model reply must contain. It
serves two purposes:

- ``render()`` produces the TypeScript-style interface text embedded in the
  translation prompt.
- ``validate(obj)`` checks a parsed JSON object against the fields with a
  pydantic model built via ``create_model``.

Validation rules
----------------
- Excess keys are dropped.
- A missing or ``null`` optional field takes its declared default, or is
  omitted when it has none.
- A missing required field, a wrong primitive type, an enum value outside the
  allowed set, or a list longer than ``max_items`` is a failure.
- Types are strict: ``"1"`` is not an integer and ``1`` is not a string.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Dict, List, Literal, Optional, Sequence, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr, ValidationError, create_model

from ..base.errors import TranslationValidationError

FieldType = Literal["string", "number", "integer", "boolean", "array", "object"]

_NO_DEFAULT: Any = object()

_PY_TYPES: Dict[str, Any] = {
    "string": StrictStr,
    "number": Union[StrictInt, StrictFloat],
    "integer": StrictInt,
    "boolean": StrictBool,
    "object": Dict[str, Any],
}

_TS_TYPES: Dict[str, str] = {
    "string": "string",
    "number": "number",
    "integer": "number",
    "boolean": "boolean",
    "object": "Record<string, any>",
}


@dataclass(frozen=True)
class FieldSpec:
    """One field of an output shape.

    Attributes:
        name: JSON key.
        type: Primitive type, ``array`` or ``object``.
        required: Whether the key must be present.
        enum: Allowed string values; implies ``type="string"``.
        items: Element type when ``type="array"``.
        max_items: Maximum list length, enforced.
        max_length: Maximum string length, enforced.
        default: Value used when an optional field is absent.
        description: Free-text hint rendered as a comment in the prompt only.
    """

    name: str
    type: FieldType = "string"
    required: bool = True
    enum: Optional[Tuple[str, ...]] = None
    items: Optional[FieldType] = None
    max_items: Optional[int] = None
    max_length: Optional[int] = None
    default: Any = _NO_DEFAULT
    description: Optional[str] = None

    @property
    def has_default(self) -> bool:
        return self.default is not _NO_DEFAULT

    def annotation(self) -> Any:
        if self.enum:
            return Literal[tuple(self.enum)]  # type: ignore[valid-type]
        if self.type == "array":
            item = _PY_TYPES.get(self.items or "string", Any)
            return List[item]  # type: ignore[valid-type]
        return _PY_TYPES[self.type]

    def ts_type(self) -> str:
        if self.enum:
            return " | ".join(f'"{v}"' for v in self.enum)
        if self.type == "array":
            return f"{_TS_TYPES.get(self.items or 'string', 'any')}[]"
        return _TS_TYPES[self.type]


@dataclass(frozen=True)
class ShapeDescriptor:
    """Named, ordered set of :class:`FieldSpec` entries."""

    name: str
    fields: Tuple[FieldSpec, ...] = field(default_factory=tuple)
    description: Optional[str] = None

    def __post_init__(self) -> None:
        seen = set()
        for f in self.fields:
            if f.name in seen:
                raise ValueError(f"duplicate field '{f.name}' in shape {self.name}")
            seen.add(f.name)

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @cached_property
    def model(self) -> Type[BaseModel]:
        """Pydantic model mirroring the shape; built on first use."""
        definitions: Dict[str, Any] = {}
        for spec in self.fields:
            constraints: Dict[str, Any] = {}
            if spec.max_items is not None:
                constraints["max_length"] = spec.max_items
            elif spec.max_length is not None:
                constraints["max_length"] = spec.max_length
            if spec.required:
                definitions[spec.name] = (spec.annotation(), Field(..., **constraints))
            else:
                # Absent optionals are filled or pruned after validation.
                definitions[spec.name] = (Optional[spec.annotation()], Field(None, **constraints))
        return create_model(  # type: ignore[call-overload]
            self.name,
            __config__=ConfigDict(extra="ignore"),
            **definitions,
        )

    def validate(self, obj: Any) -> Dict[str, Any]:
        """Return ``obj`` reduced to the declared fields.

        Raises:
            TranslationValidationError: ``obj`` is not an object or does not
                satisfy the field rules.
        """
        if not isinstance(obj, dict):
            raise TranslationValidationError(
                f"Expected a JSON object of type {self.name}, got {type(obj).__name__}"
            )
        optional = {f.name for f in self.fields if not f.required}
        candidate = {k: v for k, v in obj.items() if not (k in optional and v is None)}
        try:
            instance = self.model.model_validate(candidate)
        except ValidationError as exc:
            raise TranslationValidationError(_describe(exc)) from exc

        dumped = instance.model_dump()
        out: Dict[str, Any] = {}
        for spec in self.fields:
            if spec.name in candidate:
                out[spec.name] = dumped[spec.name]
            elif spec.has_default:
                out[spec.name] = spec.default
        return out

    def render(self) -> str:
        """Return the shape as a TypeScript interface declaration."""
        lines: List[str] = []
        if self.description:
            lines.append(f"// {self.description}")
        lines.append(f"export interface {self.name} {{")
        for spec in self.fields:
            if spec.description:
                lines.append(f"    // {spec.description}")
            opt = "" if spec.required else "?"
            lines.append(f"    {spec.name}{opt}: {spec.ts_type()};")
        lines.append("}")
        return "\n".join(lines)


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def shape(name: str, specs: Sequence[FieldSpec], description: Optional[str] = None) -> ShapeDescriptor:
    """Shorthand for ``ShapeDescriptor(name, tuple(specs), description)``."""
    return ShapeDescriptor(name=name, fields=tuple(specs), description=description)


__all__ = ["FieldSpec", "FieldType", "ShapeDescriptor", "shape"]
