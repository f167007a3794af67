"""td home directory discovery.

Provides the canonical function for locating the user-global ``~/.td/``
directory under which every project directory lives.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

TD_HOME_ENV_VAR = "TD_HOME"
TD_DIRNAME = ".td"


class ConfigurationError(RuntimeError):
    """Raised when the td home directory cannot be determined."""


def _is_windows() -> bool:
    """Return True when running on Windows."""
    return os.name == "nt"


def get_td_home() -> Path:
    """Return the path to the user-global ~/.td/ directory.

    Resolution order:
    1. TD_HOME environment variable (all platforms)
    2. ~/.td/ on macOS/Linux (Path.home() / ".td")
    3. %LOCALAPPDATA%\\td\\ on Windows (via platformdirs)

    The directory is not created here; the project locator creates it
    together with the project directory.

    Returns:
        Path: Absolute path to the td home directory.

    Raises:
        ConfigurationError: If the home directory cannot be determined.
    """
    if env_home := os.environ.get(TD_HOME_ENV_VAR):
        logger.debug("Using td home from %s: %s", TD_HOME_ENV_VAR, env_home)
        return Path(env_home).expanduser()

    if _is_windows():
        from platformdirs import user_data_dir

        return Path(user_data_dir("td", appauthor=False))

    try:
        home = Path.home()
    except (RuntimeError, KeyError) as exc:
        raise ConfigurationError(f"Could not find the home directory: {exc}") from exc
    return home / TD_DIRNAME
