"""Render indexed icon files into fixed-size premultiplied RGBA buffers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from PIL import Image

from appdrawer.core.icon_index import IconFormat
from appdrawer.core.svg import SvgError, SvgRasterizer
from appdrawer.errors import IconErrorCode, IconLoadError, classify_exception

logger = logging.getLogger(__name__)

RESIZE_FILTER = Image.Resampling.BICUBIC

# Exceptions Pillow raises for unreadable or undecodable bitmaps.
DECODE_ERRORS = (OSError, ValueError, SyntaxError, EOFError, Image.DecompressionBombError)


class ResizePolicy(Enum):
    """When a decoded bitmap is scaled to the requested size.

    ``BOTH_DIFFER`` only scales when width and height both differ from the
    target, so a bitmap matching one dimension keeps its size.
    ``EITHER_DIFFERS`` scales whenever the bitmap is not exactly square at
    the target size.
    """

    BOTH_DIFFER = "both"
    EITHER_DIFFERS = "either"

    def needs_resize(self, width: int, height: int, size: int) -> bool:
        if self is ResizePolicy.BOTH_DIFFER:
            return width != size and height != size
        return width != size or height != size


@dataclass
class Icon:
    """Rendered icon: RGBA8 pixels with premultiplied alpha."""

    data: bytes = field(repr=False)
    width: int
    name: str

    @property
    def height(self) -> int:
        if not self.width:
            return 0
        return len(self.data) // (self.width * 4)


def to_premultiplied(image: Image.Image) -> Image.Image:
    """Convert to Pillow's premultiplied ``RGBa`` mode.

    The conversion computes ``round(c * a / 255)`` per colour channel and
    leaves alpha unchanged.
    """
    if image.mode == "RGBa":
        return image
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return image.convert("RGBa")


def premultiply(image: Image.Image) -> bytes:
    """Return RGBA8 bytes with colour channels scaled by alpha."""
    return to_premultiplied(image).tobytes()


class IconRenderer:
    """Turns an indexed icon file into an :class:`Icon` of a given size."""

    def __init__(
        self,
        rasterizer: SvgRasterizer | None = None,
        *,
        resize_policy: ResizePolicy = ResizePolicy.BOTH_DIFFER,
        resample: Image.Resampling = RESIZE_FILTER,
    ) -> None:
        self._rasterizer = rasterizer or SvgRasterizer()
        self.resize_policy = resize_policy
        self._resample = resample

    def render(self, path: str | Path, fmt: IconFormat, size: int, name: str = "") -> Icon:
        """Render ``path`` at ``size`` pixels.

        Raises IconLoadError tagged with the failing stage.
        """
        path = Path(path)
        if fmt is IconFormat.RASTER:
            return self._render_raster(path, size, name)
        if fmt is IconFormat.VECTOR:
            return self._render_vector(path, size, name)
        raise IconLoadError(
            IconErrorCode.UNSUPPORTED_FORMAT,
            name=name,
            path=path,
            details={"format": str(fmt)},
        )

    def _render_raster(self, path: Path, size: int, name: str) -> Icon:
        try:
            with Image.open(path) as source:
                image = to_premultiplied(source)
        except DECODE_ERRORS as exc:
            raise classify_exception(exc, name=name, path=path) from exc

        # Resampling in RGBa mode works on premultiplied values directly.
        if self.resize_policy.needs_resize(image.width, image.height, size):
            logger.debug("resizing %s from %dx%d to %d", path, image.width, image.height, size)
            image = image.resize((size, size), self._resample)

        return Icon(data=image.tobytes(), width=image.width, name=name)

    def _render_vector(self, path: Path, size: int, name: str) -> Icon:
        try:
            svg = self._rasterizer.rasterize(path, size)
        except OSError as exc:
            raise IconLoadError(IconErrorCode.IO_FAILURE, name=name, path=path, cause=exc) from exc
        except SvgError as exc:
            raise IconLoadError(
                IconErrorCode.RASTERIZE_FAILURE, name=name, path=path, cause=exc
            ) from exc
        return Icon(data=svg.data, width=svg.width, name=name)
