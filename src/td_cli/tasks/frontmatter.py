"""Task file format: YAML frontmatter followed by a free-form description.

A task file looks like::

    ---
    title: Write tests
    status: todo
    created_at: '2026-10-17T09:30:00+00:00'
    id: 0b7f4d7e-5b1e-4c55-9d0f-4c5e0a7e2f11
    ---
    Description text, kept verbatim.

The metadata block must open on the first line and close on its own line.
Everything after the closing delimiter is the description, untouched.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Mapping
from datetime import datetime, timezone
from io import StringIO
from pathlib import Path
from typing import Any
from uuid import UUID

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError

from td_cli.tasks.models import Task, TaskStatus

logger = logging.getLogger(__name__)

DELIMITER = "---\n"
REQUIRED_FIELDS = ("title", "status", "created_at", "id")


class FormatError(ValueError):
    """Raised when task file content cannot be parsed or produced."""


def _yaml() -> YAML:
    yaml = YAML()
    yaml.default_flow_style = False
    # Never fold long titles across lines.
    yaml.width = 4096
    return yaml


def split_frontmatter(content: str) -> tuple[str, str]:
    """Return (metadata_text, description).

    Raises:
        FormatError: If the opening or closing delimiter line is missing.
    """
    if not content.startswith(DELIMITER):
        raise FormatError("The task file does not start with '---' followed by a new line")

    rest = content[len(DELIMITER):]
    if rest.startswith(DELIMITER):
        end = 0
    else:
        closing = rest.find("\n" + DELIMITER)
        if closing == -1:
            raise FormatError("Missing closing '---'")
        end = closing + 1

    return rest[:end], rest[end + len(DELIMITER):]


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def _parse_timestamp(key: str, value: Any) -> datetime:
    if isinstance(value, datetime):
        # ruamel hands back its own datetime subclass; keep a plain datetime.
        parsed = datetime(
            value.year, value.month, value.day,
            value.hour, value.minute, value.second, value.microsecond,
            tzinfo=value.tzinfo,
        )
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError as exc:
            raise FormatError(f"Invalid timestamp for '{key}': {value!r}") from exc
    else:
        raise FormatError(f"Field '{key}' must be a timestamp, got {type(value).__name__}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError as exc:
        raise FormatError(f"Timestamp for '{key}' out of range: {value!r}") from exc


def _parse_tags(value: Any) -> list[str]:
    if not isinstance(value, list):
        raise FormatError(f"Field 'tags' must be a list, got {type(value).__name__}")
    tags: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise FormatError(f"Tag {item!r} must be a string")
        tags.append(str(item))
    return tags


def _task_from_metadata(metadata: Any, description: str) -> Task:
    if not isinstance(metadata, Mapping):
        raise FormatError("Task metadata must be a mapping")

    missing = [key for key in REQUIRED_FIELDS if key not in metadata]
    if missing:
        raise FormatError(f"Missing required field(s): {', '.join(missing)}")

    title = metadata["title"]
    if not isinstance(title, str):
        raise FormatError(f"Field 'title' must be a string, got {type(title).__name__}")

    status = metadata["status"]
    if not isinstance(status, str):
        raise FormatError(f"Field 'status' must be a string, got {type(status).__name__}")
    try:
        parsed_status = TaskStatus.parse(status)
    except ValueError as exc:
        raise FormatError(str(exc)) from exc

    raw_id = metadata["id"]
    try:
        task_id = UUID(str(raw_id))
    except ValueError as exc:
        raise FormatError(f"Invalid task id: {raw_id!r}") from exc

    updated_at = metadata.get("updated_at")
    return Task(
        title=str(title),
        id=task_id,
        status=parsed_status,
        created_at=_parse_timestamp("created_at", metadata["created_at"]),
        updated_at=None if updated_at is None else _parse_timestamp("updated_at", updated_at),
        tags=_parse_tags(metadata["tags"]) if "tags" in metadata else [],
        description=description,
    )


def parse_task(content: str) -> Task:
    """Decode a task file.

    Raises:
        FormatError: On missing delimiters, invalid YAML, or invalid fields.
    """
    metadata_text, description = split_frontmatter(content)
    try:
        metadata = _yaml().load(metadata_text)
    except (YAMLError, ValueError, TypeError, OverflowError) as exc:
        # Explicitly tagged scalars (e.g. ``!!int abc``) fail in the constructors.
        raise FormatError(f"Invalid task metadata: {exc}") from exc
    return _task_from_metadata(metadata, description)


def serialize_task(task: Task) -> str:
    """Encode a task as frontmatter plus description.

    ``updated_at`` is omitted while unset and ``tags`` while empty.

    Raises:
        FormatError: If the metadata cannot be emitted as YAML.
    """
    # CommentedMap keeps insertion order on output.
    metadata = CommentedMap()
    metadata["title"] = task.title
    metadata["status"] = task.status.value
    metadata["created_at"] = _format_timestamp(task.created_at)
    if task.updated_at is not None:
        metadata["updated_at"] = _format_timestamp(task.updated_at)
    metadata["id"] = str(task.id)
    if task.tags:
        metadata["tags"] = list(task.tags)

    stream = StringIO()
    try:
        _yaml().dump(metadata, stream)
    except YAMLError as exc:
        raise FormatError(f"Could not serialize task metadata: {exc}") from exc

    return f"{DELIMITER}{stream.getvalue()}{DELIMITER}{task.description}"


def read_task(path: Path) -> Task:
    """Read and decode a task file.

    Raises:
        OSError: If the file cannot be read.
        FormatError: If its content is not a valid task.
    """
    with path.open("r", encoding="utf-8", newline="") as f:
        content = f.read()
    try:
        return parse_task(content)
    except FormatError as exc:
        raise FormatError(f"{path}: {exc}") from exc


def write_task(path: Path, task: Task) -> None:
    """Atomically write a task file (temp file + rename).

    The temp file is created in the same directory so the rename stays on
    one filesystem. Existing files are never replaced.

    Raises:
        FileExistsError: If ``path`` already exists.
        OSError: If the write fails.
        FormatError: If the task cannot be serialized.
    """
    if path.exists():
        raise FileExistsError(f"Task file already exists: {path}")

    content = serialize_task(task)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.replace(tmp_path, path)
    except Exception:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
    logger.debug("Wrote task %s to %s", task.id, path)
