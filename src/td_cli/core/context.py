"""Explicit runtime configuration for td commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from td_cli.core.git import GitRepositoryLookup, RepositoryLookup
from td_cli.runtime.home import get_td_home


@dataclass(frozen=True)
class TdContext:
    """Everything a command reads from its environment, resolved once.

    Fields:
        home: td home directory (``~/.td`` by default)
        cwd: Directory used to discover the enclosing repository
        repository: Capability used to read the ``origin`` remote
    """

    home: Path
    cwd: Path
    repository: RepositoryLookup = field(default_factory=GitRepositoryLookup)

    @classmethod
    def from_environment(cls) -> TdContext:
        """Build the context from TD_HOME / the OS home and the working directory.

        Raises:
            ConfigurationError: If the home directory cannot be determined.
        """
        return cls(home=get_td_home(), cwd=Path.cwd(), repository=GitRepositoryLookup())
