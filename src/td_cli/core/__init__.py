"""Core utilities for td: configuration context, git lookup, project paths."""

from .context import TdContext
from .git import (
    GitRepositoryLookup,
    RemoteNotFoundError,
    RepositoryLookup,
    RepositoryNotFoundError,
)
from .paths import ProjectDirectory, resolve_project_directory, sanitize_dir_name

__all__ = [
    "GitRepositoryLookup",
    "ProjectDirectory",
    "RemoteNotFoundError",
    "RepositoryLookup",
    "RepositoryNotFoundError",
    "TdContext",
    "resolve_project_directory",
    "sanitize_dir_name",
]
