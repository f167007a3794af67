"""Project directory resolution.

Maps the ``origin`` remote of the enclosing repository to a directory under
the td home, so tasks are partitioned per project without any configuration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from td_cli.core.context import TdContext
from td_cli.core.git import DEFAULT_REMOTE

logger = logging.getLogger(__name__)

PROBLEMATIC_CHARS = (
    "/", "\\", ":", "*", "?", '"', "<", ">", "|", " ",
    "@", "#", "$", "%", "^", "&", "+", "=", "~",
)

# Sanitized segments never start with a dot, so this cannot collide with a project.
NO_PROJECT_DIRNAME = ".no-project"


@dataclass(frozen=True)
class ProjectDirectory:
    """Resolved storage location for the current project."""

    path: Path
    remote_url: str | None = None
    is_fallback: bool = False


def sanitize_dir_name(origin: str) -> str:
    """Turn an arbitrary remote URL into a single safe path segment.

    Order matters: denylisted characters are replaced first, then edge dots
    are trimmed, then remaining ``..`` pairs are collapsed.
    """
    sanitized = origin
    for char in PROBLEMATIC_CHARS:
        sanitized = sanitized.replace(char, "_")

    sanitized = sanitized.strip(".")
    sanitized = sanitized.replace("..", "_")
    return sanitized


def _remote_segment(context: TdContext) -> tuple[str | None, str | None]:
    """Return (remote_url, sanitized segment), or (None, None) without identity."""
    try:
        url = context.repository.find_remote_url(context.cwd, DEFAULT_REMOTE)
    except LookupError as exc:
        logger.debug("No project identity: %s", exc)
        return None, None

    segment = sanitize_dir_name(url)
    if not segment:
        logger.debug("Remote URL %r sanitizes to an empty segment", url)
        return url, None
    return url, segment


def resolve_project_directory(context: TdContext) -> ProjectDirectory:
    """Return the existing storage directory for the current project.

    Falls back to the shared ``.no-project`` directory under the td home when
    the working directory has no repository, no ``origin`` remote, or a
    remote URL that sanitizes to nothing.

    Raises:
        OSError: If the directory cannot be created.
    """
    url, segment = _remote_segment(context)
    if segment is None:
        project_dir = context.home / NO_PROJECT_DIRNAME
        logger.info("No git remote '%s' found; using %s", DEFAULT_REMOTE, project_dir)
    else:
        project_dir = context.home / segment

    project_dir.mkdir(parents=True, exist_ok=True)
    logger.debug("Resolved project directory %s", project_dir)
    return ProjectDirectory(path=project_dir, remote_url=url, is_fallback=segment is None)
