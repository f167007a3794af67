"""Git repository discovery and remote lookup.

Provides:
- RepositoryLookup protocol, the capability the project locator depends on
- GitRepositoryLookup, backed by the ``git`` executable
- find_repo_root(), the upward walk for an enclosing repository
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_REMOTE = "origin"


class RepositoryNotFoundError(LookupError):
    """Raised when no git repository encloses the starting directory."""


class RemoteNotFoundError(LookupError):
    """Raised when the repository has no usable URL for the requested remote."""


class RepositoryLookup(Protocol):
    """Capability to read a remote URL for the repository enclosing a path."""

    def find_remote_url(self, start: Path, remote: str = DEFAULT_REMOTE) -> str:
        """Return the URL of ``remote``.

        Raises:
            RepositoryNotFoundError: If no repository encloses ``start``.
            RemoteNotFoundError: If the remote or its URL is missing.
        """
        ...


@dataclass
class _GitCommandResult:
    returncode: int
    stdout: str
    stderr: str


def _run_git(repo_root: Path, args: list[str], timeout: int = 5) -> _GitCommandResult:
    """Run git command and normalize failure shape for deterministic handling."""
    try:
        completed = subprocess.run(
            ["git", *args],
            cwd=str(repo_root),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout,
        )
        return _GitCommandResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
    except FileNotFoundError:
        logger.warning("git not found; cannot read repository remotes")
        return _GitCommandResult(
            returncode=127,
            stdout="",
            stderr="git executable not found on PATH",
        )
    except subprocess.TimeoutExpired:
        logger.warning("git remote command timed out")
        return _GitCommandResult(
            returncode=124,
            stdout="",
            stderr=f"git command timed out: git {' '.join(args)}",
        )


def find_repo_root(start: Path) -> Path:
    """Walk upward until a directory containing ``.git`` is found.

    ``.git`` may be a directory (regular checkout) or a file (worktrees and
    submodules).

    Raises:
        RepositoryNotFoundError: If no ancestor of ``start`` is a repository.
    """
    current = start.resolve()
    for candidate in [current, *current.parents]:
        if (candidate / ".git").exists():
            return candidate
    raise RepositoryNotFoundError(f"No git repository encloses {start}")


class GitRepositoryLookup:
    """RepositoryLookup implementation that shells out to ``git``."""

    def find_remote_url(self, start: Path, remote: str = DEFAULT_REMOTE) -> str:
        repo_root = find_repo_root(start)
        logger.debug("Found repository at %s", repo_root)

        result = _run_git(repo_root, ["remote", "get-url", remote])
        if result.returncode != 0:
            detail = result.stderr.strip() or f"git exited with {result.returncode}"
            raise RemoteNotFoundError(f"Remote '{remote}' not available: {detail}")

        url = result.stdout.strip()
        if not url:
            raise RemoteNotFoundError(f"Remote '{remote}' has no URL")
        return url
