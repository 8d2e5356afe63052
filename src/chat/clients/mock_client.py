# Offline stand-in for the completion endpoint, used only when the
# configured API key is the placeholder. Pure: same transcript, same reply.

from typing import Callable, Iterable, List, Tuple

from ..types import Role, Turn

GREETING = (
    "Hello! I'm a mock AI assistant. Since you're using a placeholder API key, "
    "I'm providing simulated responses for testing purposes."
)
STATUS = "I'm just a simulated response for testing purposes, but thanks for asking!"
WEATHER = (
    "I can't check the actual weather since this is a simulated response. "
    "In a real implementation, I would connect to the completion API to provide accurate information."
)
IDENTITY = (
    "I'm a simulated chat assistant response for testing purposes. "
    "In a real implementation, I would be powered by a hosted language model."
)
MULTI_QUESTION = (
    "I notice you've used multiple question marks. This is a simulated response since you're "
    "using a placeholder API key. For real responses, please configure a valid API key."
)
QUESTION = (
    "That's an interesting question! This is a simulated response for testing purposes. "
    "With a valid API key, you would receive an actual response from the model."
)
PLACEHOLDER_NOTICE = (
    "This is a simulated response since you're using a placeholder API key. For real "
    "AI-powered responses, please configure a valid API key in your config.properties "
    "file or as an environment variable."
)

Rule = Tuple[Callable[[str], bool], str]

# evaluated top to bottom, first match wins; input is already lower-cased
RULES: List[Rule] = [
    (lambda m: "hello" in m or "hi" in m, GREETING),
    (lambda m: "how are you" in m, STATUS),
    (lambda m: "weather" in m, WEATHER),
    (lambda m: "name" in m, IDENTITY),
    (lambda m: "??" in m, MULTI_QUESTION),
    (lambda m: m.endswith("?"), QUESTION),
]


def last_user_message(turns: Iterable[Turn]) -> str:
    last = ""
    for t in turns:
        if t.role is Role.USER:
            last = t.content
    return last


def respond(turns: Iterable[Turn]) -> str:
    message = last_user_message(turns).lower()
    for matches, reply in RULES:
        if matches(message):
            return reply
    return PLACEHOLDER_NOTICE


class MockClient:
    """Drop-in for the HTTP client that answers from RULES."""

    def __init__(self):
        self.model = "mock"

    def respond(self, turns: Iterable[Turn]) -> str:
        return respond(turns)
