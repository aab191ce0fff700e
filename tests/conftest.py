"""Shared fixtures for recentfiles tests."""

import tempfile
from pathlib import Path
from typing import Dict, List, Optional

import git
import pytest
import structlog

from recentfiles.cache import CommitMetadataCache
from recentfiles.exceptions import ExternalToolFailure
from recentfiles.git import GitProvider, OperationToken


class FakeProvider(GitProvider):
    """In-memory provider recording every call it answers."""

    def __init__(
        self,
        commits: Optional[List[str]] = None,
        files: Optional[Dict[str, List[str]]] = None,
        times: Optional[Dict[str, str]] = None,
        fail_on: Optional[set] = None,
    ) -> None:
        self.commits = commits or []
        self.files = files or {}
        self.times = times or {}
        self.fail_on = fail_on or set()
        self.calls: List[tuple] = []

    def _check(self, *call: str) -> None:
        self.calls.append(call)
        if call in self.fail_on:
            raise ExternalToolFailure(["git", *call], 128, "fatal: simulated failure")

    def list_commits(self, limit: int, token: OperationToken) -> str:
        self._check("log", str(limit))
        return "\n".join(self.commits[:limit])

    def list_files(self, commit_hash: str, token: OperationToken) -> str:
        self._check("diff", commit_hash)
        return "\n".join(self.files.get(commit_hash, [])) + "\n"

    def commit_time(self, commit_hash: str, token: OperationToken) -> str:
        self._check("show", commit_hash)
        return self.times[commit_hash]

    def count(self, operation: str) -> int:
        return sum(1 for call in self.calls if call[0] == operation)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration applied by CLI tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def token():
    """Operation token without a deadline."""
    return OperationToken()


@pytest.fixture
def cache():
    """Fresh metadata cache."""
    return CommitMetadataCache()


@pytest.fixture
def fake_provider():
    """Two commits: ``a1`` (newest) and ``b2``."""
    return FakeProvider(
        commits=["a1", "b2"],
        files={
            "a1": ["main.go", "main_test.go"],
            "b2": ["main.go", "utils.go"],
        },
        times={
            "a1": "Mon, 15 Jan 2024 10:30:00 +0100\n",
            "b2": "Sun, 14 Jan 2024 09:00:00 +0000\n",
        },
    )


@pytest.fixture
def go_repo():
    """Create a temporary Git repository with two commits and a dirty working tree.

    History (newest first):
        second: modifies main.go, adds main_test.go and api/api.pb.go
        first:  adds README.md, main.go and util.go
    util.go is then modified without committing.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        repo_path = Path(tmpdir)
        repo = git.Repo.init(repo_path)

        # Configure git
        repo.config_writer().set_value("user", "name", "Test User").release()
        repo.config_writer().set_value("user", "email", "test@example.com").release()

        (repo_path / "README.md").write_text("# Test Project\n")
        (repo_path / "main.go").write_text("package main\n")
        (repo_path / "util.go").write_text("package main\n")
        repo.index.add(["README.md", "main.go", "util.go"])
        first = repo.index.commit("Initial commit")

        (repo_path / "api").mkdir()
        (repo_path / "main.go").write_text("package main\n\nfunc main() {}\n")
        (repo_path / "main_test.go").write_text("package main\n")
        (repo_path / "api" / "api.pb.go").write_text("package api\n")
        repo.index.add(["main.go", "main_test.go", "api/api.pb.go"])
        second = repo.index.commit("Add main")

        (repo_path / "util.go").write_text("package main\n\nfunc util() {}\n")

        yield {
            "path": repo_path,
            "first": repo.git.rev_parse(first.hexsha, short=True),
            "second": repo.git.rev_parse(second.hexsha, short=True),
        }


@pytest.fixture
def make_provider():
    """Factory for in-memory providers."""
    return FakeProvider
