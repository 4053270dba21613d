# stream/provider.py

from dataclasses import dataclass
from enum import Enum
from typing import AsyncIterator, Optional, Protocol, Sequence, Tuple

from ..conversation.messages import Message


class ReasoningEffort(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class FinishReason(str, Enum):
    STOP = "stop"
    LENGTH = "length"
    CONTENT_FILTER = "content_filter"
    TOOL_CALLS = "tool_calls"
    FUNCTION_CALL = "function_call"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["FinishReason"]:
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class CompletionOptions:
    """
    Request knobs passed through to the provider unchanged.

    A field left as None is omitted from the request.
    """
    temperature: Optional[float] = None
    max_output_tokens: Optional[int] = None
    reasoning_effort: Optional[ReasoningEffort] = None


@dataclass(frozen=True)
class UsageStats:
    """Token accounting for one completion."""
    total_tokens: int = 0
    input_tokens: int = 0
    output_tokens: int = 0
    cached_input_tokens: int = 0
    accepted_prediction_tokens: int = 0
    rejected_prediction_tokens: int = 0
    reasoning_tokens: int = 0


@dataclass(frozen=True)
class UpdateEvent:
    """One discrete update from a provider's streaming channel."""
    text_fragments: Tuple[str, ...] = ()
    finish_reason: Optional[FinishReason] = None
    usage: Optional[UsageStats] = None
    timestamp: Optional[str] = None


class CompletionProvider(Protocol):
    """Produces a live sequence of updates for an ordered message list."""

    def stream_completion(
        self,
        messages: Sequence[Message],
        options: CompletionOptions,
    ) -> AsyncIterator[UpdateEvent]: ...
