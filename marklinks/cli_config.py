"""Discovery of the ``.env`` file that feeds MARKLINKS_* settings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

LOGGER = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "marklinks"
CONFIG_ENV_FILE = CONFIG_DIR / ".env"
EXAMPLE_ENV_FILE = Path(__file__).parent.parent / ".env.example"


def find_env_file(cwd: Path, config_env_file: Path) -> Optional[Path]:
    """Return the project ``.env`` if present, else the user one, else None."""
    for candidate in (cwd / ".env", config_env_file):
        if candidate.is_file():
            return candidate
    return None


def seed_env_file(
    example_file: Path,
    config_env_file: Path,
    copy_file: Callable[[Path, Path], object],
) -> bool:
    """Copy the bundled example settings into the user config directory.

    Returns False when there is no example to copy or the copy fails.
    """
    if not example_file.is_file():
        return False
    try:
        config_env_file.parent.mkdir(parents=True, exist_ok=True)
        copy_file(example_file, config_env_file)
    except OSError as exc:
        LOGGER.debug("Could not seed %s: %s", config_env_file, exc)
        return False
    LOGGER.info("Created settings file %s from %s", config_env_file, example_file.name)
    return True


def load_config(
    *,
    config_env_file: Path,
    cwd: Path,
    load_env: Callable[[Path], bool],
    copy_file: Callable[[Path, Path], object],
    example_file: Path = EXAMPLE_ENV_FILE,
) -> Optional[Path]:
    """Load MARKLINKS_* settings into the environment.

    A ``.env`` in ``cwd`` wins over ``config_env_file``. When neither exists
    the example file is copied to ``config_env_file`` first. Returns the file
    that was loaded, if any.
    """
    env_file = find_env_file(cwd, config_env_file)
    if env_file is None and seed_env_file(example_file, config_env_file, copy_file):
        env_file = config_env_file
    if env_file is not None:
        load_env(env_file)
    return env_file
