"""Workers for loading application entries and rescaling their icons."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from appdrawer.core.catalog import BASE_ICON_SIZE, IconCatalog
from appdrawer.core.desktop_entries import DesktopEntries
from appdrawer.core.icon_index import DEFAULT_ICON_PATHS, IconIndex
from appdrawer.core.renderer import IconRenderer, ResizePolicy
from appdrawer.workers.base_worker import BaseWorker

if TYPE_CHECKING:
    from appdrawer.core.icon_index import ThemeDirectory


class EntryLoadWorker(BaseWorker):
    """Indexes icon themes and loads desktop entries in a background thread."""

    def __init__(
        self,
        icon_paths: Iterable[ThemeDirectory] = DEFAULT_ICON_PATHS,
        data_dirs: list[Path] | None = None,
        *,
        scale_factor: int = 1,
        base_size: int = BASE_ICON_SIZE,
        resize_policy: ResizePolicy = ResizePolicy.BOTH_DIFFER,
    ) -> None:
        super().__init__()
        self._icon_paths = list(icon_paths)
        self._data_dirs = data_dirs
        self._scale_factor = scale_factor
        self._base_size = base_size
        self._resize_policy = resize_policy

    def run(self) -> None:
        self.started.emit()
        try:
            self.progress.emit(0, 0, "Indexing icon themes...")
            index = IconIndex.build(self._icon_paths)
            if self._is_cancelled:
                self.cancelled.emit()
                return

            catalog = IconCatalog(
                index,
                IconRenderer(resize_policy=self._resize_policy),
                base_size=self._base_size,
                scale_factor=self._scale_factor,
            )
            entries = DesktopEntries(catalog, self._data_dirs, load=False)
            completed = entries.reload(
                progress_cb=lambda count, name: self._throttled_progress(count, 0, name),
                is_cancelled=lambda: self._is_cancelled,
            )
            if not completed:
                self.cancelled.emit()
                return
            self.progress.emit(len(entries), len(entries), f"Loaded {len(entries)} applications")
            self.finished.emit(entries)
        except Exception as e:
            self.error.emit(str(e))


class RescaleWorker(BaseWorker):
    """Re-renders every loaded icon for a new scale factor.

    The entries must not be touched from other threads while it runs.
    """

    def __init__(self, entries: DesktopEntries, scale_factor: int) -> None:
        super().__init__()
        self._entries = entries
        self._scale_factor = scale_factor

    def run(self) -> None:
        self.started.emit()
        try:
            changed = self._entries.set_scale_factor(self._scale_factor)
            self.finished.emit(changed)
        except Exception as e:
            self.error.emit(str(e))
