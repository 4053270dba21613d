# errors.py

from typing import Optional


class TokenlineError(Exception):
    """Base class for all tokenline errors."""


class ConfigurationError(TokenlineError):
    """A required setting is missing, empty or unreadable."""


class InvalidArgument(TokenlineError, ValueError):
    """Raised on caller misuse, e.g. an empty system prompt."""


class ProviderFailure(TokenlineError):
    """
    A completion provider failed while a turn was in flight.

    The message is the provider's own message, passed through unchanged.
    """
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthenticationError(ProviderFailure):
    """Provider rejected the credentials (401/403)."""


class TransportError(ProviderFailure):
    """Any other provider or network failure."""
