"""Shared fixtures.

- ``fake_repo``: a directory tree with a ``.git`` marker and a resolver whose
  origin reader returns a fixed URL, so no git process is involved
- ``git_repo``: a real repository created with GitPython, for tests that go
  through ``git config``
"""

from pathlib import Path
from typing import Callable, Optional

import pytest
from git import Repo

from issue_linker.repo.resolver import RemoteResolver


JS_SAMPLE = (
    "// comment with issue (#789)\n"
    "const x = 42; // another (#101112)\n"
    "/* multi-line\n"
    "   (#131415) */\n"
)


class RecordingReader:
    """Origin reader returning a fixed URL and counting its calls."""

    def __init__(self, url: Optional[str] = None, error: Optional[Exception] = None):
        self.url = url
        self.error = error
        self.calls: list[Path] = []

    def __call__(self, repo_root: Path) -> str:
        self.calls.append(repo_root)
        if self.error is not None:
            raise self.error
        return self.url


@pytest.fixture
def fake_repo(tmp_path) -> Callable[..., tuple[Path, RemoteResolver, RecordingReader]]:
    """Factory: ``fake_repo(url)`` -> (repo_root, resolver, reader)."""

    def _make(url: Optional[str] = None, error: Optional[Exception] = None):
        root = tmp_path / "repo"
        (root / ".git").mkdir(parents=True, exist_ok=True)
        reader = RecordingReader(url=url, error=error)
        return root, RemoteResolver(origin_reader=reader), reader

    return _make


@pytest.fixture
def no_repo_resolver() -> tuple[RemoteResolver, RecordingReader]:
    """Resolver that never finds a repository marker."""
    reader = RecordingReader(url="git@github.com:owner/repo.git")
    resolver = RemoteResolver(origin_reader=reader, path_exists=lambda path: False)
    return resolver, reader


@pytest.fixture
def git_repo(tmp_path) -> Callable[[Optional[str]], Path]:
    """Factory: ``git_repo(origin_url)`` -> root of a freshly initialized repo."""

    def _make(origin_url: Optional[str] = None) -> Path:
        root = tmp_path / "checkout"
        root.mkdir(exist_ok=True)
        repo = Repo.init(root)
        if origin_url is not None:
            repo.create_remote("origin", origin_url)
        return root

    return _make


@pytest.fixture
def js_sample() -> str:
    return JS_SAMPLE
