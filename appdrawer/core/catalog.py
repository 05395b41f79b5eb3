"""Icon lookup and rendering with a rescalable cache of rendered icons."""

from __future__ import annotations

import logging

from appdrawer.core.icon_index import IconIndex
from appdrawer.core.renderer import Icon, IconRenderer
from appdrawer.errors import IconErrorCode, IconLoadError

logger = logging.getLogger(__name__)

BASE_ICON_SIZE = 64


class IconCatalog:
    """Resolves icon names to rendered icons and keeps them for rescaling.

    Icons are stored by name the first time they resolve. :meth:`rescale`
    re-renders every stored name at the new size without rescanning the
    theme directories.
    """

    def __init__(
        self,
        index: IconIndex,
        renderer: IconRenderer | None = None,
        *,
        base_size: int = BASE_ICON_SIZE,
        scale_factor: int = 1,
    ) -> None:
        if base_size <= 0:
            raise ValueError(f"base_size must be positive, got {base_size}")
        _check_scale_factor(scale_factor)
        self._index = index
        self._renderer = renderer or IconRenderer()
        self._base_size = base_size
        self._scale_factor = scale_factor
        self._icons: dict[str, Icon] = {}

    @property
    def index(self) -> IconIndex:
        return self._index

    @property
    def base_size(self) -> int:
        return self._base_size

    @property
    def scale_factor(self) -> int:
        return self._scale_factor

    @property
    def icon_size(self) -> int:
        """Pixel size icons are rendered at for the current scale factor."""
        return self._base_size * self._scale_factor

    def resolve(self, name: str, size: int | None = None) -> Icon:
        """Render the icon called ``name`` and remember it.

        ``size`` defaults to :attr:`icon_size`. Raises IconLoadError with
        ``NOT_FOUND`` when no theme directory provides the name.
        """
        target = self.icon_size if size is None else size
        entry = self._index.lookup(name)
        if entry is None:
            raise IconLoadError(IconErrorCode.NOT_FOUND, name=name)
        icon = self._renderer.render(entry.path, entry.format, target, name=name)
        self._icons[name] = icon
        return icon

    def rescale(self, scale_factor: int) -> bool:
        """Switch to ``scale_factor`` and re-render every stored icon.

        Returns False without rendering anything when the factor is
        unchanged. Icons that fail to re-render keep their previous pixels.
        """
        _check_scale_factor(scale_factor)
        if scale_factor == self._scale_factor:
            return False
        self._scale_factor = scale_factor
        size = self.icon_size

        rendered: dict[str, Icon] = {}
        for name in self._icons:
            entry = self._index.lookup(name)
            if entry is None:
                continue
            try:
                rendered[name] = self._renderer.render(entry.path, entry.format, size, name=name)
            except IconLoadError as exc:
                logger.warning("keeping previous icon for %s: %s", name, exc.to_dict())
        self._icons.update(rendered)
        logger.debug(
            "rescaled %d/%d icons to %dpx", len(rendered), len(self._icons), size
        )
        return True

    def get(self, name: str) -> Icon | None:
        return self._icons.get(name)

    def forget(self, name: str) -> None:
        """Drop a stored icon so it is no longer re-rendered."""
        self._icons.pop(name, None)

    def names(self) -> list[str]:
        return list(self._icons)

    def __contains__(self, name: object) -> bool:
        return name in self._icons

    def __len__(self) -> int:
        return len(self._icons)


def _check_scale_factor(scale_factor: int) -> None:
    if scale_factor < 1:
        raise ValueError(f"scale_factor must be a positive integer, got {scale_factor}")
