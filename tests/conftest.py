# Shared fixtures. Transport is always a FakeHTTP so no test touches the
# network, and provider env vars are cleared so local keys never leak in.

import pytest
import requests

from src.chat import ChatCompletionsClient, ChatSession, Credential, PLACEHOLDER_API_KEY
from tests.helpers import FakeHTTP, FakeResponse

ENV_VARS = ("OPENAI_API_KEY", "OPENAI_API_URL", "CHAT_MODEL", "CHAT_PROPERTIES_FILE", "LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def real_credential():
    return Credential(api_key="sk-test-123", endpoint_url="https://api.example.test/v1/chat/completions")


@pytest.fixture
def placeholder_credential():
    return Credential(api_key=PLACEHOLDER_API_KEY)


@pytest.fixture
def make_session(real_credential):
    def _make(status=200, body=None, error=None, credential=None):
        http = FakeHTTP(FakeResponse(status, body if body is not None else {}), error=error)
        session = ChatSession(credential or real_credential, client=ChatCompletionsClient(post=http.post))
        return session, http
    return _make


@pytest.fixture
def connection_error():
    return requests.exceptions.ConnectionError("Failed to resolve host api.example.test")
