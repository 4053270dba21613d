# stream/__init__.py

from .provider import (
    CompletionOptions,
    CompletionProvider,
    FinishReason,
    ReasoningEffort,
    UpdateEvent,
    UsageStats,
)
from .remote import AzureOpenAIStream

__all__ = [
    'AzureOpenAIStream',
    'CompletionOptions',
    'CompletionProvider',
    'FinishReason',
    'ReasoningEffort',
    'UpdateEvent',
    'UsageStats',
]
