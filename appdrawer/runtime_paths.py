"""XDG base directory helpers."""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_DATA_DIRS = ("/usr/local/share", "/usr/share")


def _env_dirs(var: str) -> list[Path]:
    raw = os.environ.get(var, "")
    # Relative entries are invalid per the XDG base directory spec.
    return [Path(part) for part in raw.split(os.pathsep) if part and os.path.isabs(part)]


def data_dirs() -> list[Path]:
    """Return ``$XDG_DATA_DIRS`` in preference order, or the XDG defaults."""
    dirs = _env_dirs("XDG_DATA_DIRS")
    if dirs:
        return dirs
    return [Path(d) for d in DEFAULT_DATA_DIRS]


def config_home() -> Path:
    """Return ``$XDG_CONFIG_HOME``, falling back to ``~/.config``."""
    raw = os.environ.get("XDG_CONFIG_HOME", "")
    if raw and os.path.isabs(raw):
        return Path(raw)
    return Path.home() / ".config"


def application_dirs(roots: list[Path] | None = None) -> list[Path]:
    """Directories holding ``.desktop`` files under each data dir."""
    return [root / "applications" for root in (data_dirs() if roots is None else roots)]
