"""Exception types raised by the chat package."""

from __future__ import annotations
from typing import Optional

from .types import ErrorKind, Failure


class ChatError(Exception):
    """Base exception for the chat client."""


class ConfigurationError(ChatError):
    """Raised at startup when no usable credential or config is found."""


class InvalidTranscriptError(ChatError, ValueError):
    """Raised when a transcript carries more than one system turn."""


class CompletionError(ChatError):
    """A failed exchange with the completion endpoint.

    Wraps the classified ``Failure`` so callers can render kind, status and
    provider error type without parsing the message.
    """

    def __init__(self, failure: Failure):
        super().__init__(failure.message)
        self.failure = failure

    @property
    def kind(self) -> ErrorKind:
        return self.failure.kind

    @property
    def status(self) -> Optional[int]:
        return self.failure.status

    @property
    def error_type(self) -> Optional[str]:
        return self.failure.error_type

    @property
    def message(self) -> str:
        return self.failure.message

    def __str__(self) -> str:
        return self.failure.describe()


def format_error(err: CompletionError) -> str:
    """Render a failure for display in a console or UI."""
    out = f"API Error: {err.message}"
    if err.status is not None:
        out += f"\nStatus Code: {err.status}"
        out += f"\nError Type: {err.error_type or 'unknown'}"
    return out
