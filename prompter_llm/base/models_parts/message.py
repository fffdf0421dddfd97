"""
Message DTO used across providers.

Defines the `Message` dataclass and the `Role` literal representing the sender
role. Conversation order is significant and preserved by every formatter.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal


# Message roles accepted by every provider shape.
Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class Message:
    """A role-tagged chat message.

    A ``system`` message, when present, is expected to come first; this is the
    caller's responsibility and is not enforced.
    """

    role: Role
    content: str

    def to_dict(self) -> Dict[str, Any]:
        """Return the ``{"role", "content"}`` mapping sent by OpenAI-style shapes."""
        return {"role": self.role, "content": self.content}

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role="user", content=content)

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role="system", content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role="assistant", content=content)


__all__ = ["Message", "Role"]
