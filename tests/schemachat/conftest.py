import sys
from pathlib import Path
from types import SimpleNamespace

import pytest


def pytest_configure():
    # src/ layout: make the package importable without an editable install.
    repo_root = Path(__file__).resolve().parents[2]
    src_path = str(repo_root / "src")
    if src_path not in sys.path:
        sys.path.insert(0, src_path)


class FakeCompletions:
    """Records create() kwargs and returns a canned response."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls: list[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


class FakeOpenAIClient:
    def __init__(self, response=None, error=None):
        self.completions = FakeCompletions(response=response, error=error)
        self.chat = SimpleNamespace(completions=self.completions)


@pytest.fixture
def sdk_response():
    """Factory: SDK-shaped (attribute access) chat completion."""

    def _factory(content="", *, choices=True):
        if not choices:
            return SimpleNamespace(choices=[])
        message = SimpleNamespace(role="assistant", content=content)
        return SimpleNamespace(choices=[SimpleNamespace(index=0, message=message)])

    return _factory


@pytest.fixture
def fake_openai_client():
    def _factory(response=None, error=None):
        return FakeOpenAIClient(response=response, error=error)

    return _factory


@pytest.fixture
def completion_payload():
    """Factory: wire JSON for a chat.completion response."""

    def _factory(content="", *, choices=True):
        return {
            "id": "chatcmpl-1",
            "object": "chat.completion",
            "created": 1700000000,
            "model": "gpt-4o-mini",
            "choices": (
                [
                    {
                        "index": 0,
                        "message": {"role": "assistant", "content": content},
                        "finish_reason": "stop",
                    }
                ]
                if choices
                else []
            ),
        }

    return _factory
