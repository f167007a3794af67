"""Per-project task storage: one ``<id>.td`` file per task."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from uuid import UUID

from td_cli.tasks.frontmatter import read_task, write_task
from td_cli.tasks.models import Task

logger = logging.getLogger(__name__)

TASK_FILE_SUFFIX = ".td"


class TaskStore:
    """Reads and writes task files inside a single project directory.

    Attributes:
        directory: Existing project directory holding the task files
    """

    def __init__(self, directory: Path):
        self.directory = directory

    def path_for(self, task_id: UUID) -> Path:
        return self.directory / f"{task_id}{TASK_FILE_SUFFIX}"

    def add(self, task: Task) -> Path:
        """Persist a new task and return the file it was written to.

        Raises:
            FileExistsError: If a file for this task id already exists.
            OSError: If the file cannot be written.
        """
        path = self.path_for(task.id)
        write_task(path, task)
        logger.info("Added task %s (%s)", task.id, task.title)
        return path

    def load(self, task_id: UUID) -> Task:
        """Read a task back by id.

        Raises:
            FileNotFoundError: If no file exists for ``task_id``.
            FormatError: If the file is not a valid task.
        """
        return read_task(self.path_for(task_id))

    def list_names(self) -> list[str]:
        """Return every entry name in the directory, in enumeration order.

        Not sorted, filtered, or recursive.
        """
        return os.listdir(self.directory)
