"""Shared fixtures: fake GitHub upstream and an app client wired to it."""

from typing import Callable, Iterator, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from star_history.datasources.github_adapter import GitHubAdapter
from star_history.main import app, get_github

UpstreamHandler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_repo() -> Callable[..., dict]:
    """Build a repository object shaped like GitHub's /users/{user}/repos items."""

    def _make(name: str, stars: int = 0, fork: bool = False, owner: str = "alice", **extra) -> dict:
        repo = {
            "name": name,
            "full_name": f"{owner}/{name}",
            "owner": {"login": owner},
            "stargazers_count": stars,
            "description": None,
            "language": None,
            "html_url": f"https://github.com/{owner}/{name}",
            "fork": fork,
            "archived": False,
        }
        repo.update(extra)
        return repo

    return _make


@pytest.fixture
def make_adapter() -> Callable[..., GitHubAdapter]:
    def _make(handler: UpstreamHandler, token: Optional[str] = None, base_url: str = "https://api.github.com") -> GitHubAdapter:
        return GitHubAdapter(token=token, base_url=base_url, transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def make_client(make_adapter) -> Iterator[Callable[..., TestClient]]:
    """TestClient whose GitHub adapter is served by ``handler``."""

    def _make(handler: UpstreamHandler, token: Optional[str] = None) -> TestClient:
        adapter = make_adapter(handler, token=token)
        app.dependency_overrides[get_github] = lambda: adapter
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
