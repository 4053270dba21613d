# __init__.py

from .logger import Logger
from .config import AppConfig, load_config
from .conversation import Conversation, Message, Role
from .session import StreamingChatSession, StreamingTurnResult, validate_credentials
from .interface import Interface

__all__ = [
    "AppConfig",
    "Conversation",
    "Interface",
    "Logger",
    "Message",
    "Role",
    "StreamingChatSession",
    "StreamingTurnResult",
    "load_config",
    "validate_credentials",
]
