from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import pytest


def pytest_configure():
    # Ensure project root is on sys.path for absolute imports like 'icebreaker.services...'
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


class FakeBackend:
    """Records prompts and replays canned responses (or raises)."""

    provider = "fake"
    model_name = "fake-model"

    def __init__(self, response: str | Exception = "") -> None:
        self.response = response
        self.prompts: list[str] = []

    async def generate(self, prompt_text: str, *, json_mode: bool = True) -> str:
        self.prompts.append(prompt_text)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


class FakeScraper:
    def __init__(self, profile: dict[str, Any] | Exception) -> None:
        self.profile = profile
        self.calls: list[tuple[str, str]] = []

    async def fetch_profile(self, *, token: str, profile_url: str) -> dict[str, Any]:
        self.calls.append((token, profile_url))
        if isinstance(self.profile, Exception):
            raise self.profile
        return self.profile


def draft_json(**overrides: Any) -> str:
    body = {
        "strategy": "Company News",
        "signal_used": "Series B announcement",
        "icebreaker": "Congrats on announcing the Series B at Acme.",
        "message": "Hi Jane, congrats on announcing the Series B at Acme. "
        "Would love to follow what you build next.",
    }
    body.update(overrides)
    return json.dumps(body)


@pytest.fixture
def jane_profile() -> dict[str, Any]:
    return {
        "fullName": "Jane Doe",
        "headline": "Founder at Acme",
        "posts": [{"text": "Announcing our Series B"}],
    }


@pytest.fixture
def log_path(tmp_path) -> Path:
    return tmp_path / "requests.ndjson"
