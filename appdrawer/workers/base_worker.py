"""Base worker class with standard signals for background operations."""

from __future__ import annotations

from threading import Event
from time import monotonic

from PySide6.QtCore import QObject, Signal

# Minimum seconds between throttled progress events.
PROGRESS_INTERVAL = 0.05


class BaseWorker(QObject):
    """Base class for workers moved onto a QThread.

    Icon resolution blocks on disk reads and rasterization, so callers that
    need a responsive UI run it through a worker:

        worker = EntryLoadWorker(icon_paths, data_dirs, scale_factor=2)
        thread = QThread()
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        worker.finished.connect(thread.quit)
        worker.finished.connect(worker.deleteLater)
        thread.finished.connect(thread.deleteLater)
        thread.start()
    """

    started = Signal()
    progress = Signal(int, int, str)    # current, total, message
    finished = Signal(object)           # result data
    error = Signal(str)                 # error message
    cancelled = Signal()

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._cancel_event = Event()
        self._last_progress = 0.0

    def cancel(self) -> None:
        self._cancel_event.set()

    @property
    def _is_cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def _throttled_progress(self, current: int, total: int, message: str) -> None:
        # Avoid flooding the receiving thread's event queue.
        now = monotonic()
        if current <= 1 or current % 25 == 0 or (now - self._last_progress) >= PROGRESS_INTERVAL:
            self.progress.emit(current, total, message)
            self._last_progress = now

    def run(self) -> None:
        """Override in subclass. Called when thread starts."""
        raise NotImplementedError
