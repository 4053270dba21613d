# conversation/messages.py

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """
    Represents a single message in the conversation.
    """
    role: Role
    text: str

    def to_dict(self) -> dict:
        """Return the message in the provider's wire form."""
        return {"role": self.role.value, "content": self.text}
