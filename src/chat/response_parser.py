# Pulls the generated text out of a completion response body.

from __future__ import annotations
import json
from typing import Any, Optional, Union


def extract_text(body: Union[str, bytes, dict, None]) -> Optional[str]:
    """Return ``choices[0].message.content`` or None.

    Accepts the raw body (str/bytes) or an already decoded dict. Only the
    first choice is ever surfaced. Bodies that are not JSON, have no or
    empty ``choices``, or whose first choice has no string content all
    yield None.
    """
    data: Any = body
    if isinstance(body, (str, bytes)):
        try:
            data = json.loads(body)
        except ValueError:
            return None
    if not isinstance(data, dict):
        return None

    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None
