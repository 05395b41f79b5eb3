"""Application settings via QSettings."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QSettings

from appdrawer.core.catalog import BASE_ICON_SIZE
from appdrawer.core.icon_index import DEFAULT_ICON_PATHS, ThemeDirectory
from appdrawer.core.renderer import ResizePolicy
from appdrawer.runtime_paths import config_home


class AppSettings:
    """Wraps QSettings for persistent app configuration."""

    def __init__(self, qsettings: QSettings | None = None) -> None:
        self._qs = qsettings if qsettings is not None else QSettings("AppDrawer", "AppDrawer")

    # -- icons --

    @property
    def scale_factor(self) -> int:
        value = self._qs.value("icons/scale_factor", 1, type=int)
        return value if value >= 1 else 1

    @scale_factor.setter
    def scale_factor(self, value: int) -> None:
        self._qs.setValue("icons/scale_factor", max(1, int(value)))

    @property
    def base_icon_size(self) -> int:
        value = self._qs.value("icons/base_size", BASE_ICON_SIZE, type=int)
        return value if value >= 1 else BASE_ICON_SIZE

    @base_icon_size.setter
    def base_icon_size(self, value: int) -> None:
        value = int(value)
        self._qs.setValue("icons/base_size", value if value >= 1 else BASE_ICON_SIZE)

    @property
    def resize_policy(self) -> ResizePolicy:
        raw = self._qs.value("icons/resize_policy", ResizePolicy.BOTH_DIFFER.value, type=str)
        try:
            return ResizePolicy((raw or "").strip().lower())
        except ValueError:
            return ResizePolicy.BOTH_DIFFER

    @resize_policy.setter
    def resize_policy(self, value: ResizePolicy | str) -> None:
        try:
            policy = ResizePolicy(value)
        except ValueError:
            policy = ResizePolicy.BOTH_DIFFER
        self._qs.setValue("icons/resize_policy", policy.value)

    @property
    def icon_paths(self) -> list[ThemeDirectory]:
        """Theme directories, lowest priority first."""
        raw = self._qs.value("icons/paths", [])
        if isinstance(raw, str):
            raw = [raw]
        if not isinstance(raw, list):
            return list(DEFAULT_ICON_PATHS)
        paths: list[ThemeDirectory] = []
        for item in raw:
            if not isinstance(item, str):
                continue
            try:
                paths.append(parse_theme_directory(item))
            except ValueError:
                continue
        return paths or list(DEFAULT_ICON_PATHS)

    @icon_paths.setter
    def icon_paths(self, value: list[ThemeDirectory]) -> None:
        self._qs.setValue(
            "icons/paths",
            [f"{entry.path}:{entry.format.extension}" for entry in value],
        )

    # -- helpers --

    @property
    def app_data_dir(self) -> Path:
        path = config_home() / "appdrawer"
        path.mkdir(parents=True, exist_ok=True)
        return path

    def sync(self) -> None:
        self._qs.sync()


def parse_theme_directory(raw: str) -> ThemeDirectory:
    """Parse ``"/path/to/dir:png"`` into a ThemeDirectory."""
    path, sep, fmt = raw.rpartition(":")
    if not sep or not path:
        raise ValueError(f"Expected PATH:FORMAT, got {raw!r}")
    return ThemeDirectory.of(path, fmt)
