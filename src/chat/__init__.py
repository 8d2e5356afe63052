# Chat package

# Makes chat/ importable and exposes key interfaces.

from .session import ChatSession
from .types import (
    Role,
    Turn,
    Transcript,
    CompletionRequest,
    Credential,
    ErrorKind,
    TextResult,
    Failure,
    PLACEHOLDER_API_KEY,
)
from .errors import ChatError, CompletionError, ConfigurationError, InvalidTranscriptError, format_error
from .request_builder import build_request
from .response_parser import extract_text
from .clients.http_client import ChatCompletionsClient, classify_response
from .clients.mock_client import MockClient

__all__ = [
    "ChatSession",
    "Role",
    "Turn",
    "Transcript",
    "CompletionRequest",
    "Credential",
    "ErrorKind",
    "TextResult",
    "Failure",
    "PLACEHOLDER_API_KEY",
    "ChatError",
    "CompletionError",
    "ConfigurationError",
    "InvalidTranscriptError",
    "format_error",
    "build_request",
    "extract_text",
    "ChatCompletionsClient",
    "classify_response",
    "MockClient",
]
