"""Role-tagged message values exchanged with the backend and stored in conversations."""

from dataclasses import dataclass
from typing import Literal

Role = Literal["system", "user", "assistant"]

VALID_ROLES = {"system", "user", "assistant"}


@dataclass(frozen=True)
class Message:
    role: Role
    content: str

    def __post_init__(self):
        if self.role not in VALID_ROLES:
            raise ValueError(f"Invalid role '{self.role}'. Must be one of: {VALID_ROLES}")
        if not isinstance(self.content, str):
            raise ValueError("Message content must be a string.")

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}

    @classmethod
    def from_dict(cls, data: dict) -> "Message":
        if not isinstance(data, dict):
            raise ValueError(f"Message must be an object, got {type(data).__name__}.")
        if "role" not in data or "content" not in data:
            raise ValueError("Message missing required fields (role, content).")
        if not isinstance(data["role"], str):
            raise ValueError(f"Message role must be a string, got {data['role']!r}.")
        return cls(role=data["role"], content=data["content"])


def create_message(role: Role, content: str) -> Message:
    """Build a message value."""
    return Message(role=role, content=content)
