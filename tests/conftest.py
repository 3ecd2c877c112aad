"""Test configuration for pytest."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# The notifier ships as flat modules next to main.py, the way the action runs them.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

RUNNER_VARS = (
    "GITHUB_REPOSITORY",
    "GITHUB_SHA",
    "GITHUB_REF",
    "GITHUB_EVENT_NAME",
    "GITHUB_EVENT_PATH",
    "GITHUB_OUTPUT",
    "INPUT_WEBHOOK_URL",
    "INPUT_COLOR",
    "INPUT_USERNAME",
    "INPUT_AVATAR_URL",
    "INPUT_CONTENT",
    "INPUT_FOOTER",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Strip runner variables so tests behave the same inside GitHub Actions."""
    for name in RUNNER_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class FakeResponse:
    def __init__(self, status_code=204, reason="No Content", text=""):
        self.status_code = status_code
        self.reason = reason
        self.text = text


@pytest.fixture
def fake_post(monkeypatch):
    """Replace requests.post in the webhook module and record each call."""
    import webhook

    calls: list[dict[str, object]] = []
    state = {"response": FakeResponse()}

    def _post(url, **kwargs):
        calls.append({"url": url, **kwargs})
        return state["response"]

    def respond(**kwargs):
        state["response"] = FakeResponse(**kwargs)

    _post.calls = calls
    _post.respond = respond
    monkeypatch.setattr(webhook.requests, "post", _post)
    return _post
