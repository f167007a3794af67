"""Task records, their file format, and per-project storage."""

from .frontmatter import FormatError, parse_task, read_task, serialize_task, write_task
from .models import Task, TaskStatus, parse_tags
from .store import TASK_FILE_SUFFIX, TaskStore

__all__ = [
    "FormatError",
    "TASK_FILE_SUFFIX",
    "Task",
    "TaskStatus",
    "TaskStore",
    "parse_tags",
    "parse_task",
    "read_task",
    "serialize_task",
    "write_task",
]
