# conversation/__init__.py

from .messages import Message, Role
from .history import Conversation

__all__ = ['Conversation', 'Message', 'Role']
