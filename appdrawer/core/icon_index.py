"""Scan icon theme directories into a name -> file index."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, Mapping

logger = logging.getLogger(__name__)


class IconFormat(Enum):
    """Icon file formats understood by the renderer."""

    RASTER = "png"
    VECTOR = "svg"

    @property
    def extension(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str | IconFormat) -> IconFormat:
        """Accept a format, its extension, or its lowercase name."""
        if isinstance(value, IconFormat):
            return value
        cleaned = (value or "").strip().lower().lstrip(".")
        for fmt in cls:
            if cleaned in (fmt.value, fmt.name.lower()):
                return fmt
        raise ValueError(f"Unknown icon format: {value!r}")


@dataclass(frozen=True)
class ThemeDirectory:
    """A directory expected to hold icons of a single format."""

    path: Path
    format: IconFormat

    @classmethod
    def of(cls, path: str | Path, fmt: str | IconFormat) -> ThemeDirectory:
        return cls(Path(path), IconFormat.parse(fmt))


@dataclass(frozen=True)
class IndexedIcon:
    """Resolved location of a named icon."""

    path: Path
    format: IconFormat


# Lowest priority first: later entries replace earlier ones with the same name.
DEFAULT_ICON_PATHS: tuple[ThemeDirectory, ...] = (
    ThemeDirectory.of("/usr/share/icons/hicolor/32x32/apps", IconFormat.RASTER),
    ThemeDirectory.of("/usr/share/icons/hicolor/64x64/apps", IconFormat.RASTER),
    ThemeDirectory.of("/usr/share/icons/hicolor/256x256/apps", IconFormat.RASTER),
    ThemeDirectory.of("/usr/share/icons/hicolor/scalable/apps", IconFormat.VECTOR),
    ThemeDirectory.of("/usr/share/icons/hicolor/128x128/apps", IconFormat.RASTER),
    ThemeDirectory.of("/usr/share/pixmaps", IconFormat.VECTOR),
    ThemeDirectory.of("/usr/share/pixmaps", IconFormat.RASTER),
)


def scan_directory(directory: ThemeDirectory) -> dict[str, IndexedIcon]:
    """Return the icons found directly inside one theme directory.

    Only regular files whose extension matches the directory's declared
    format are kept. A missing or unreadable directory yields an empty map.
    """
    found: dict[str, IndexedIcon] = {}
    suffix = directory.format.extension
    try:
        entries = list(os.scandir(directory.path))
    except OSError as exc:
        logger.debug("skipping icon directory %s: %s", directory.path, exc)
        return found

    for entry in sorted(entries, key=lambda e: e.name):
        try:
            if not entry.is_file(follow_symlinks=False):
                continue
        except OSError:
            continue
        stem, dot, ext = entry.name.rpartition(".")
        if not dot or ext != suffix:
            continue
        found[stem] = IndexedIcon(path=Path(entry.path), format=directory.format)
    return found


def merge_by_priority(layers: Iterable[Mapping[str, IndexedIcon]]) -> dict[str, IndexedIcon]:
    """Fold per-directory maps left to right; later layers overwrite earlier ones."""
    merged: dict[str, IndexedIcon] = {}
    for layer in layers:
        merged.update(layer)
    return merged


class IconIndex:
    """Immutable mapping from icon name to its highest-priority file."""

    def __init__(self, icons: Mapping[str, IndexedIcon] | None = None) -> None:
        self._icons: dict[str, IndexedIcon] = dict(icons or {})

    @classmethod
    def build(
        cls,
        directories: Iterable[ThemeDirectory] = DEFAULT_ICON_PATHS,
        *,
        max_workers: int = 1,
    ) -> IconIndex:
        """Scan ``directories`` (lowest priority first) into a new index.

        With ``max_workers > 1`` directories are listed concurrently; the
        results are still merged in declaration order.
        """
        dirs = list(directories)
        if max_workers > 1 and len(dirs) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                layers = list(pool.map(scan_directory, dirs))
        else:
            layers = [scan_directory(d) for d in dirs]
        index = cls(merge_by_priority(layers))
        logger.debug("indexed %d icons from %d directories", len(index), len(dirs))
        return index

    def lookup(self, name: str) -> IndexedIcon | None:
        """Return where ``name`` lives, or None when no directory has it."""
        return self._icons.get(name)

    def names(self) -> list[str]:
        return sorted(self._icons)

    def __contains__(self, name: object) -> bool:
        return name in self._icons

    def __len__(self) -> int:
        return len(self._icons)

    def __iter__(self) -> Iterator[str]:
        return iter(self._icons)
