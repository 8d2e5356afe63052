# Data structures shared by the chat modules: turns, transcripts,
# requests, credentials and the tagged completion result.

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union

PLACEHOLDER_API_KEY = "sk-your-api-key-here"
DEFAULT_API_URL = "https://api.openai.com/v1/chat/completions"


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Turn:
    """Single chat turn: system, user, or assistant."""
    role: Role
    content: str = ""

    def __post_init__(self):
        # accept plain strings ("user") as well as Role members
        object.__setattr__(self, "role", Role(self.role))
        if self.content is None:
            object.__setattr__(self, "content", "")

    @classmethod
    def system(cls, content: str) -> "Turn":
        return cls(Role.SYSTEM, content)

    @classmethod
    def user(cls, content: str) -> "Turn":
        return cls(Role.USER, content)

    @classmethod
    def assistant(cls, content: str) -> "Turn":
        return cls(Role.ASSISTANT, content)

    def to_dict(self) -> dict:
        return {"role": self.role.value, "content": self.content}


class Transcript:
    """Ordered conversation history, replayed in full on every request.

    The transcript does not forbid several system turns; keeping a single
    leading one is the session's job.
    """

    def __init__(self, turns: Optional[List[Turn]] = None):
        self._turns: List[Turn] = list(turns or [])

    @classmethod
    def with_system(cls, prompt: str) -> "Transcript":
        return cls([Turn.system(prompt)])

    @property
    def turns(self) -> Tuple[Turn, ...]:
        return tuple(self._turns)

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(list(self._turns))

    def __getitem__(self, index):
        return self._turns[index]

    def __repr__(self) -> str:
        return f"Transcript({self._turns!r})"

    def append(self, turn: Turn) -> Turn:
        self._turns.append(turn)
        return turn

    def add_user_turn(self, content: str) -> Turn:
        return self.append(Turn.user(content))

    def add_assistant_turn(self, content: str) -> Turn:
        return self.append(Turn.assistant(content))

    def pop(self) -> Turn:
        return self._turns.pop()

    def set_system_turn(self, content: str) -> Turn:
        """Replace the leading system turn, or insert one at index 0."""
        turn = Turn.system(content)
        if self._turns and self._turns[0].role is Role.SYSTEM:
            self._turns[0] = turn
        else:
            self._turns.insert(0, turn)
        return turn

    def clear_system_turn(self) -> Optional[Turn]:
        if self._turns and self._turns[0].role is Role.SYSTEM:
            return self._turns.pop(0)
        return None

    def system_turns(self) -> List[Turn]:
        return [t for t in self._turns if t.role is Role.SYSTEM]

    def reset(self) -> None:
        self._turns.clear()


@dataclass(frozen=True)
class CompletionRequest:
    """One request to the completion endpoint. Built fresh for each call."""
    model: str
    turns: Tuple[Turn, ...]
    temperature: float = 0.7
    max_output_tokens: int = 1000
    stream: bool = False


@dataclass(frozen=True)
class Credential:
    api_key: str
    endpoint_url: str = DEFAULT_API_URL

    @property
    def is_placeholder(self) -> bool:
        return self.api_key == PLACEHOLDER_API_KEY

    def __repr__(self) -> str:
        return f"Credential(api_key='***', endpoint_url={self.endpoint_url!r})"


class ErrorKind(str, Enum):
    TRANSPORT_ERROR = "transport_error"
    PROVIDER_ERROR = "provider_error"
    MALFORMED_RESPONSE = "malformed_response"


@dataclass(frozen=True)
class TextResult:
    text: str


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    status: Optional[int] = None
    error_type: Optional[str] = None
    message: str = ""

    def describe(self) -> str:
        parts = [self.kind.value]
        if self.status is not None:
            parts.append(f"status={self.status}")
        if self.error_type:
            parts.append(f"type={self.error_type}")
        return f"[{' '.join(parts)}] {self.message}"


CompletionResult = Union[TextResult, Failure]
