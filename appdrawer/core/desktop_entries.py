"""Enumerate installed applications from .desktop files."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Iterator, NamedTuple

from appdrawer.core.catalog import IconCatalog
from appdrawer.core.renderer import Icon
from appdrawer.errors import IconLoadError
from appdrawer.runtime_paths import application_dirs

logger = logging.getLogger(__name__)

DESKTOP_SUFFIX = ".desktop"


class DesktopFields(NamedTuple):
    """Raw fields read from a desktop file."""

    name: str
    exec: str
    icon: str


@dataclass
class DesktopEntry:
    """An installed application with its rendered icon."""

    name: str
    exec: str
    icon: Icon


def parse_desktop_file(lines: Iterable[str]) -> DesktopFields | None:
    """Extract Name, Exec and Icon from desktop file lines.

    The first occurrence of each key wins and reading stops once all three
    are known. Exec is reduced to its first space-separated token. Returns
    None when any key is missing.
    """
    name = exec_ = icon = None
    for line in lines:
        line = line.rstrip("\r\n")
        if name is None and line.startswith("Name="):
            name = line[len("Name="):]
        elif icon is None and line.startswith("Icon="):
            icon = line[len("Icon="):]
        elif exec_ is None and line.startswith("Exec="):
            exec_ = line[len("Exec="):].split(" ")[0]

        if name is not None and exec_ is not None and icon is not None:
            return DesktopFields(name=name, exec=exec_, icon=icon)
    return None


def read_desktop_file(path: str | Path) -> DesktopFields | None:
    """Parse one desktop file; unreadable or non UTF-8 files yield None."""
    try:
        with open(path, encoding="utf-8") as fh:
            return parse_desktop_file(fh)
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("skipping desktop file %s: %s", path, exc)
        return None


def iter_desktop_files(directories: Iterable[Path]) -> Iterator[Path]:
    """Yield regular ``*.desktop`` files directly inside each directory."""
    for directory in directories:
        try:
            entries = sorted(os.scandir(directory), key=lambda e: e.name)
        except OSError:
            continue
        for entry in entries:
            if not entry.name.endswith(DESKTOP_SUFFIX):
                continue
            try:
                if entry.is_file(follow_symlinks=False):
                    yield Path(entry.path)
            except OSError:
                continue


class DesktopEntries:
    """All installed applications whose icon could be resolved."""

    def __init__(
        self,
        catalog: IconCatalog,
        data_dirs: list[Path] | None = None,
        *,
        load: bool = True,
    ) -> None:
        self._catalog = catalog
        self._directories = application_dirs(data_dirs)
        self._entries: list[DesktopEntry] = []
        if load:
            self.reload()

    def reload(
        self,
        progress_cb: Callable[[int, str], None] | None = None,
        is_cancelled: Callable[[], bool] | None = None,
    ) -> bool:
        """Re-read every desktop file and resolve its icon.

        The new entries replace the old ones only once loading completes;
        returns False (keeping the previous entries) when cancelled. Icons no
        remaining entry uses are dropped from the catalog either way.
        """
        loaded: list[DesktopEntry] = []
        for entry in self.load_iter():
            if is_cancelled is not None and is_cancelled():
                self._forget_unused_icons()
                return False
            loaded.append(entry)
            if progress_cb is not None:
                progress_cb(len(loaded), entry.name)
        self._entries = loaded
        self._forget_unused_icons()
        return True

    def _forget_unused_icons(self) -> None:
        used = {entry.icon.name for entry in self._entries}
        for name in self._catalog.names():
            if name not in used:
                self._catalog.forget(name)

    def load_iter(self) -> Iterator[DesktopEntry]:
        """Yield entries one at a time (for progress reporting)."""
        size = self.icon_size()
        for path in iter_desktop_files(self._directories):
            fields = read_desktop_file(path)
            if fields is None:
                continue
            try:
                icon = self._catalog.resolve(fields.icon, size)
            except IconLoadError as exc:
                logger.debug("dropping %s: %s", path.name, exc.to_dict())
                continue
            yield DesktopEntry(name=fields.name, exec=fields.exec, icon=icon)

    def set_scale_factor(self, scale_factor: int) -> bool:
        """Update the DPI scale factor and refresh every entry's icon.

        Returns False when the factor did not change.
        """
        if not self._catalog.rescale(scale_factor):
            return False
        for entry in self._entries:
            icon = self._catalog.get(entry.icon.name)
            if icon is not None:
                entry.icon = icon
        return True

    def icon_size(self) -> int:
        return self._catalog.icon_size

    @property
    def catalog(self) -> IconCatalog:
        return self._catalog

    def get(self, index: int) -> DesktopEntry | None:
        if 0 <= index < len(self._entries):
            return self._entries[index]
        return None

    def __iter__(self) -> Iterator[DesktopEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
