import pytest

from src.chat import Transcript, Turn
from src.chat.clients import mock_client
from src.chat.clients.mock_client import respond


def _t(*user_messages):
    return [Turn.user(m) for m in user_messages]


@pytest.mark.parametrize(
    "message,expected",
    [
        ("Hello!", mock_client.GREETING),
        ("HI THERE", mock_client.GREETING),
        ("How are you today", mock_client.STATUS),
        ("Tell me the WEATHER", mock_client.WEATHER),
        ("What's your name", mock_client.IDENTITY),
        ("Really??", mock_client.MULTI_QUESTION),
        ("Can you do 2+2?", mock_client.QUESTION),
        ("Do stuff.", mock_client.PLACEHOLDER_NOTICE),
        ("", mock_client.PLACEHOLDER_NOTICE),
    ],
)
def test_rules(message, expected):
    assert respond(_t(message)) == expected


def test_first_match_wins():
    # "hello" beats the trailing question mark
    assert respond(_t("hello, can you help?")) == mock_client.GREETING
    # "hi" hides inside "this"; the substring rule still fires first
    assert respond(_t("Is this real?")) == mock_client.GREETING


def test_uses_most_recent_user_turn():
    turns = [Turn.system("You are helpful."), Turn.user("weather?"), Turn.assistant("Hello!"), Turn.user("Go.")]
    assert respond(turns) == mock_client.PLACEHOLDER_NOTICE


def test_no_user_turn_defaults_to_notice():
    assert respond([Turn.system("hello")]) == mock_client.PLACEHOLDER_NOTICE
    assert respond([]) == mock_client.PLACEHOLDER_NOTICE


def test_deterministic():
    tr = Transcript([Turn.system("You are helpful."), Turn.user("Hello!")])
    assert {respond(tr.turns) for _ in range(5)} == {mock_client.GREETING}


def test_last_user_message():
    turns = [Turn.user("one"), Turn.assistant("r"), Turn.user("two"), Turn.assistant("r2")]
    assert mock_client.last_user_message(turns) == "two"
    assert mock_client.last_user_message([Turn.assistant("r")]) == ""
