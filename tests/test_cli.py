import io

from src import cli
from src.chat import ChatCompletionsClient, ChatSession, PLACEHOLDER_API_KEY
from src.chat.clients import mock_client
from tests.helpers import FakeHTTP, FakeResponse


def test_missing_key_exits_with_config_error(capsys):
    assert cli.main(["--no-interactive"]) == 2
    assert "Configuration error" in capsys.readouterr().err


def test_question_and_loop_with_placeholder_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", PLACEHOLDER_API_KEY)
    out = io.StringIO()
    code = cli.main(["--question", "What is your name?", "--log-level", "WARNING"],
                    stdin=io.StringIO("Hello!\n\nexit\n"), stdout=out)
    assert code == 0
    text = out.getvalue()
    assert f"Answer: {mock_client.IDENTITY}" in text
    assert f"Assistant: {mock_client.GREETING}" in text


def test_loop_keeps_going_after_failure(real_credential):
    http = FakeHTTP(FakeResponse(500, '{"error":{"type":"server_error","message":"boom"}}'))
    session = ChatSession(real_credential, client=ChatCompletionsClient(post=http.post))
    out = io.StringIO()
    turns = cli.run_interactive(session, "You are helpful.", None, io.StringIO("one\ntwo\n"), out)
    assert turns == 0
    assert out.getvalue().count("API Error: boom") == 2
    assert len(http.calls) == 2
