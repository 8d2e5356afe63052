# ChatSession ties the pieces together:
#   transcript -> request_builder -> http client -> text | CompletionError
# and short-circuits to the mock client when the credential is the placeholder.

from __future__ import annotations
import os
from typing import Any, Dict, Optional

import yaml
from loguru import logger

from .clients.http_client import ChatCompletionsClient
from .clients.mock_client import MockClient
from .errors import CompletionError, InvalidTranscriptError
from .request_builder import build_request
from .types import CompletionResult, Credential, Failure, TextResult, Transcript

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config.yaml")

DEFAULTS: Dict[str, Any] = {
    "model": "gpt-3.5-turbo",
    "temperature": 0.7,
    "max_tokens": 1000,
    "temperature_min": 0.0,
    "temperature_max": 2.0,
    "system_prompt": "You are a helpful assistant.",
}


class ChatSession:
    def __init__(
        self,
        credential: Credential,
        client: Optional[ChatCompletionsClient] = None,
        config_path: str = DEFAULT_CONFIG_PATH,
        model: Optional[str] = None,
        mock_client: Optional[MockClient] = None,
    ):
        self.credential = credential
        self.client = client or ChatCompletionsClient()
        self.mock_client = mock_client or MockClient()
        self.config_path = config_path
        self.cfg = self._load_config()
        self.default_model = model or self.cfg["model"]

    @classmethod
    def from_settings(cls, settings, **kwargs) -> "ChatSession":
        from src.settings import load_credential

        return cls(load_credential(settings), model=settings.CHAT_MODEL, **kwargs)

    def _load_config(self) -> Dict[str, Any]:
        cfg = dict(DEFAULTS)
        if os.path.exists(self.config_path):
            with open(self.config_path, "r", encoding="utf-8") as f:
                cfg.update(yaml.safe_load(f) or {})
        return cfg

    @property
    def uses_mock(self) -> bool:
        return self.credential.is_placeholder

    @property
    def engine(self) -> str:
        return "mock" if self.uses_mock else "http"

    def new_transcript(self, system_prompt: Optional[str] = None) -> Transcript:
        """Fresh transcript holding the system prompt (config default if omitted)."""
        prompt = self.cfg.get("system_prompt") if system_prompt is None else system_prompt
        return Transcript.with_system(prompt) if prompt else Transcript()

    def _check(self, transcript: Transcript) -> None:
        systems = transcript.system_turns()
        if len(systems) > 1:
            raise InvalidTranscriptError(f"transcript has {len(systems)} system turns; at most one is allowed")
        if systems and transcript[0] is not systems[0]:
            raise InvalidTranscriptError("system turn must be the first turn")

    def complete(
        self,
        transcript: Transcript,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> CompletionResult:
        """One exchange, returned as a TextResult or Failure. Does not touch the transcript."""
        self._check(transcript)
        model = model or self.default_model

        if self.uses_mock:
            logger.info("Using placeholder API key - returning mock response")
            return TextResult(self.mock_client.respond(transcript.turns))

        logger.debug("Sending conversation with {} turns using model {}", len(transcript), model)
        request = build_request(
            transcript.turns,
            model,
            temperature=self.cfg["temperature"] if temperature is None else temperature,
            max_tokens=self.cfg["max_tokens"] if max_tokens is None else max_tokens,
            temperature_range=(self.cfg["temperature_min"], self.cfg["temperature_max"]),
        )
        return self.client.execute(request, self.credential)

    def send_conversation(self, transcript: Transcript, model: Optional[str] = None, **params) -> str:
        """Send the whole transcript and return the reply text.

        Raises CompletionError on any failed exchange. Nothing is appended
        to the transcript, on success or failure.
        """
        result = self.complete(transcript, model=model, **params)
        if isinstance(result, Failure):
            raise CompletionError(result)
        return result.text

    def ask_question(self, question: str, model: Optional[str] = None, **params) -> str:
        """Stateless single-turn question."""
        transcript = Transcript()
        transcript.add_user_turn(question)
        return self.send_conversation(transcript, model=model, **params)

    def reply(self, transcript: Transcript, message: str, model: Optional[str] = None, **params) -> str:
        """Append the user turn, send, append the assistant turn.

        On failure the user turn is taken back out, so the transcript is
        left as it was, and the error propagates.
        """
        turn = transcript.add_user_turn(message)
        try:
            text = self.send_conversation(transcript, model=model, **params)
        except Exception:
            if len(transcript) and transcript[-1] is turn:
                transcript.pop()
            raise
        transcript.add_assistant_turn(text)
        return text
