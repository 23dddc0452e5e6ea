import json
from typing import Any, Dict, Optional

import pytest


class FakeResponse:
    """Just enough of requests.Response for GitHubService."""

    def __init__(self, status_code: int = 200, payload: Any = None, headers: Optional[Dict[str, str]] = None, reason: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.headers = headers or {}
        self.reason = reason or ("OK" if status_code < 400 else "Error")

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        return self._payload


@pytest.fixture
def make_repo():
    def _make_repo(repo_id=123456789, name="test-repo", **overrides):
        repo = {
            "id": repo_id,
            "name": name,
            "full_name": f"testuser/{name}",
            "description": "Test repository description",
            "html_url": f"https://github.com/testuser/{name}",
            "language": "TypeScript",
            "stargazers_count": 42,
            "topics": ["react", "typescript"],
            "default_branch": "main",
            "updated_at": "2024-01-15T10:00:00Z",
            "created_at": "2024-01-01T10:00:00Z",
        }
        repo.update(overrides)
        return repo

    return _make_repo


@pytest.fixture
def config_dir(tmp_path):
    (tmp_path / "portfolio.json").write_text(
        json.dumps({"name": "Test User", "title": "Engineer", "githubUsername": "testuser"}),
        encoding="utf-8",
    )
    return tmp_path
