# Client for an OpenAI-style Chat Completions endpoint over plain HTTP.
# Posts one request, then classifies whatever comes back into a
# TextResult or a Failure. Never retries, never raises for a bad exchange.

from __future__ import annotations
import json
from typing import Callable, Optional

import requests
from loguru import logger

from ..request_builder import serialize
from ..response_parser import extract_text
from ..types import CompletionRequest, CompletionResult, Credential, ErrorKind, Failure, TextResult

CONNECT_TIMEOUT = 30.0
WRITE_TIMEOUT = 30.0
READ_TIMEOUT = 60.0

NO_CONTENT = "No content in response"
NO_BODY = "No response body"


def classify_response(status: int, body: Optional[str]) -> CompletionResult:
    """Map an HTTP status and body to exactly one result.

    Same (status, body) always gives the same result. For non-2xx replies a
    missing body (None) is reported as "No response body"; an empty string
    is passed through as the message unchanged.
    """
    if not 200 <= status < 300:
        return _provider_failure(status, body)

    text = extract_text(body) if body else None
    if text is None:
        return Failure(ErrorKind.MALFORMED_RESPONSE, status=status, message=NO_CONTENT)
    return TextResult(text)


def _provider_failure(status: int, body: Optional[str]) -> Failure:
    raw = NO_BODY if body is None else body
    error_type = "unknown"
    message = raw
    try:
        data = json.loads(body) if body else None
    except ValueError:
        data = None

    err = data.get("error") if isinstance(data, dict) else None
    if isinstance(err, dict):
        if err.get("type") is not None:
            error_type = str(err["type"])
        if err.get("message") is not None:
            message = str(err["message"])
    return Failure(ErrorKind.PROVIDER_ERROR, status=status, error_type=error_type, message=message)


class ChatCompletionsClient:
    """Executes CompletionRequests against the configured endpoint."""

    def __init__(
        self,
        post: Optional[Callable[..., requests.Response]] = None,
        connect_timeout: float = CONNECT_TIMEOUT,
        read_timeout: float = READ_TIMEOUT,
        write_timeout: float = WRITE_TIMEOUT,
    ):
        # module-level requests.post opens a fresh Session per call, so no
        # cookies or pooled connections outlive an exchange
        self.post = post or requests.post
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        # requests has no separate send timeout: after connect the socket
        # timeout covers both directions, so the larger value bounds writes.
        self.write_timeout = write_timeout

    @property
    def timeout(self):
        return (self.connect_timeout, max(self.read_timeout, self.write_timeout))

    def execute(self, request: CompletionRequest, credential: Credential) -> CompletionResult:
        headers = {
            "Authorization": f"Bearer {credential.api_key}",
            "Content-Type": "application/json",
        }
        logger.debug("POST {} (model={}, turns={})", credential.endpoint_url, request.model, len(request.turns))
        try:
            resp = self.post(
                credential.endpoint_url,
                data=serialize(request),
                headers=headers,
                timeout=self.timeout,
            )
            body = resp.text
        except requests.exceptions.RequestException as e:
            logger.error("Error communicating with completion endpoint: {}", e)
            return Failure(ErrorKind.TRANSPORT_ERROR, message=str(e) or e.__class__.__name__)

        result = classify_response(resp.status_code, body)
        if isinstance(result, Failure):
            logger.error("Completion endpoint returned {}: {}", resp.status_code, result.describe())
        else:
            logger.debug("Received completion ({} chars)", len(result.text))
        return result
