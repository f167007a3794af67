from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator

import pytest

from td_cli.core.context import TdContext
from td_cli.core.git import DEFAULT_REMOTE, RemoteNotFoundError, RepositoryNotFoundError


def run(cmd: list[str], cwd: Path) -> subprocess.CompletedProcess:
    return subprocess.run(cmd, cwd=str(cwd), check=True, capture_output=True, text=True)


@dataclass
class FakeRepositoryLookup:
    """In-memory stand-in for GitRepositoryLookup."""

    url: str | None = None
    in_repository: bool = True

    def find_remote_url(self, start: Path, remote: str = DEFAULT_REMOTE) -> str:
        if not self.in_repository:
            raise RepositoryNotFoundError(f"No git repository encloses {start}")
        if self.url is None:
            raise RemoteNotFoundError(f"Remote '{remote}' not available")
        return self.url


@pytest.fixture()
def td_home(tmp_path: Path) -> Path:
    return tmp_path / "home" / ".td"


@pytest.fixture()
def make_context(tmp_path: Path, td_home: Path) -> Callable[..., TdContext]:
    def _make(url: str | None = None, in_repository: bool = True) -> TdContext:
        return TdContext(
            home=td_home,
            cwd=tmp_path,
            repository=FakeRepositoryLookup(url=url, in_repository=in_repository),
        )

    return _make


@pytest.fixture()
def temp_repo(tmp_path: Path) -> Iterator[Path]:
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    repo_dir = tmp_path / "repo"
    repo_dir.mkdir()
    run(["git", "init"], cwd=repo_dir)
    yield repo_dir
