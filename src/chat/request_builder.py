# Turns a transcript + model + sampling params into a CompletionRequest,
# and a CompletionRequest into the JSON body the endpoint expects.

from __future__ import annotations
import json
from typing import Any, Dict, Iterable, Tuple

from .types import CompletionRequest, Turn

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000
TEMPERATURE_RANGE: Tuple[float, float] = (0.0, 2.0)


def build_request(
    transcript: Iterable[Turn],
    model: str,
    temperature: float = DEFAULT_TEMPERATURE,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    temperature_range: Tuple[float, float] = TEMPERATURE_RANGE,
) -> CompletionRequest:
    """Snapshot the transcript into a request.

    Only the model, the temperature range and the token limit are checked
    here. An empty transcript is passed through and left for the provider
    to reject.
    """
    if not model or not model.strip():
        raise ValueError("model must be a non-empty string")
    lo, hi = temperature_range
    if not lo <= temperature <= hi:
        raise ValueError(f"temperature {temperature} outside [{lo}, {hi}]")
    if max_tokens <= 0:
        raise ValueError("max_tokens must be positive")
    return CompletionRequest(
        model=model,
        turns=tuple(transcript),
        temperature=float(temperature),
        max_output_tokens=int(max_tokens),
    )


def to_payload(request: CompletionRequest) -> Dict[str, Any]:
    return {
        "model": request.model,
        "messages": [t.to_dict() for t in request.turns],
        "temperature": request.temperature,
        "max_tokens": request.max_output_tokens,
        "stream": request.stream,
    }


def serialize(request: CompletionRequest) -> bytes:
    """Wire bytes for the request; identical requests give identical bytes."""
    return json.dumps(to_payload(request), ensure_ascii=False, separators=(",", ":")).encode("utf-8")
