"""Centralized path resolution for the aliasgate package.

This is the ONLY module that touches __file__ or computes directory paths.
Every other module imports from here.

Environment variables:
    ALIASGATE_CONFIG: Path to a project config file used when no
        ``--config`` option is given. Falls back to ``.aliasgate.yaml``
        in the current working directory.
"""

import os
from pathlib import Path
from typing import Optional

_PACKAGE_DIR = Path(__file__).resolve().parent

CONFIG_ENV_VAR = "ALIASGATE_CONFIG"


def config_dir() -> Path:
    """Return the package config/ directory path."""
    return _PACKAGE_DIR / "config"


def defaults_path() -> Path:
    """Return the path to config/defaults.yaml."""
    return config_dir() / "defaults.yaml"


def theme_path() -> Path:
    """Return the path to config/theme.yaml."""
    from aliasgate.lib.config import get_str

    return config_dir() / get_str("filenames.theme")


def find_project_config(cwd: "Path | None" = None) -> Optional[Path]:
    """Locate the project config file (env override or working directory).

    Args:
        cwd: Directory to look in. Defaults to the process working directory.

    Returns:
        The config path if one exists, else None.
    """
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        p = Path(env)
        if p.is_file():
            return p

    from aliasgate.lib.config import get_str

    candidate = (cwd or Path.cwd()) / get_str("filenames.project_config")
    if candidate.is_file():
        return candidate
    return None
