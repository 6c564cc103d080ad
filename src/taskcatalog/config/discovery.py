"""Config file discovery.

The catalog root is the directory holding ``taskcatalog.toml``. Discovery
walks up from the working directory but never past a repository boundary
(a directory containing ``.git``), so a stray config in a parent checkout
is not picked up. ``TASKCATALOG_CONFIG`` short-circuits the walk.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "taskcatalog.toml"
CONFIG_ENV_VAR = "TASKCATALOG_CONFIG"

_REPO_MARKER = ".git"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest taskcatalog.toml at or above *start*, or None."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if (directory / _REPO_MARKER).exists():
            break
    return None
