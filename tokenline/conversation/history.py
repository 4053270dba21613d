# conversation/history.py

from typing import Optional, Tuple

from ..errors import InvalidArgument
from .messages import Message, Role


class Conversation:
    """
    Owns the ordered message history of one conversation.

    The history always starts with exactly one system message, fixed at
    construction. User and assistant turns are only ever appended; a reset
    builds a fresh instance so that anyone still holding the old one keeps
    seeing the pre-reset messages.
    """

    def __init__(self, system_prompt: str):
        if system_prompt is None or not system_prompt.strip():
            raise InvalidArgument("System prompt must not be empty")
        self._messages = [Message(Role.SYSTEM, system_prompt)]

    @classmethod
    def create(cls, system_prompt: str) -> "Conversation":
        return cls(system_prompt)

    @property
    def system_prompt(self) -> str:
        return self._messages[0].text

    def __len__(self) -> int:
        return len(self._messages)

    def _append(self, role: Role, text: str) -> Message:
        if text is None:
            raise InvalidArgument(f"{role.value} message text must not be None")
        message = Message(role, text)
        self._messages.append(message)
        return message

    def append_user(self, text: str) -> Message:
        """Append a user turn."""
        return self._append(Role.USER, text)

    def append_assistant(self, text: str) -> Message:
        """Append an assistant turn. Empty text is allowed."""
        return self._append(Role.ASSISTANT, text)

    def reset(self, system_prompt: Optional[str] = None) -> "Conversation":
        """Return a new conversation holding only the system message."""
        return Conversation(self.system_prompt if system_prompt is None else system_prompt)

    def snapshot(self) -> Tuple[Message, ...]:
        """Point-in-time view of the history, safe to hand to a provider."""
        return tuple(self._messages)
