import json

import pytest
import requests

CONFIG_KEYS = (
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "TRANSLATE_FROM",
    "TRANSLATE_TO",
    "TRANSLATE_HOTKEY",
    "OPENAI_TIMEOUT",
)


def make_response(status: int, payload=None, reason: str | None = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.reason = reason
    response.url = "https://api.openai.com/v1/chat/completions"
    response._content = json.dumps(payload).encode() if payload is not None else b""
    return response


def completion(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class FakeSession:
    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point XDG dirs at tmp_path and blank out config variables."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    # setenv first so monkeypatch restores them after load_dotenv overwrites
    for key in CONFIG_KEYS:
        monkeypatch.setenv(key, "")
    path = tmp_path / "config" / "smart-translate"
    path.mkdir(parents=True)
    return path
