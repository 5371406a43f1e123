"""Shared fixtures: offline settings, a fake completions backend, a mocked GitHub."""

import json
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from elitebuilders.config import Settings


def make_settings(**overrides) -> Settings:
    values = {
        "OPENAI_API_KEY": "test-key",
        "GITHUB_TOKEN": None,
        "GITHUB_PROXY": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings_factory():
    return make_settings


class FakeCompletions:
    """Stands in for ``AsyncOpenAI().chat.completions``."""

    def __init__(self, content: Optional[str] = None, error: Optional[Exception] = None):
        self.content = content
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_openai(content: Optional[str] = None, error: Optional[Exception] = None):
    completions = FakeCompletions(content=content, error=error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


@pytest.fixture
def openai_factory():
    return fake_openai


def json_reply(**scores) -> str:
    return json.dumps(scores)


REPO_SUMMARY = {
    "name": "widget",
    "full_name": "acme/widget",
    "description": "A meme generator powered by AI",
    "language": "TypeScript",
    "topics": ["ai", "memes"],
    "stargazers_count": 42,
    "forks_count": 7,
    "default_branch": "main",
    "created_at": "2024-01-02T03:04:05Z",
    "updated_at": "2024-03-04T05:06:07Z",
}


def github_handler(
    summary: Optional[Dict[str, Any]] = None,
    summary_status: int = 200,
    readme: Optional[str] = "# Widget\nGenerates memes.",
    tree: Optional[List[Dict[str, Any]]] = None,
    package_json: Optional[str] = None,
    seen: Optional[List[httpx.Request]] = None,
) -> Callable[[httpx.Request], httpx.Response]:
    """Route GitHub REST paths to canned responses; ``None`` means 404."""
    summary = summary if summary is not None else REPO_SUMMARY

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        path = request.url.path
        if path == "/repos/acme/widget":
            if summary_status != 200:
                return httpx.Response(summary_status, json={"message": "Not Found"})
            return httpx.Response(200, json=summary)
        if path == "/repos/acme/widget/readme":
            if readme is None:
                return httpx.Response(404, json={"message": "Not Found"})
            return httpx.Response(200, text=readme)
        if path.startswith("/repos/acme/widget/git/trees/"):
            if tree is None:
                return httpx.Response(404, json={"message": "Not Found"})
            return httpx.Response(200, json={"tree": tree})
        if path == "/repos/acme/widget/contents/package.json":
            if package_json is None:
                return httpx.Response(404, json={"message": "Not Found"})
            return httpx.Response(200, text=package_json)
        return httpx.Response(404, json={"message": "Not Found"})

    return handler
