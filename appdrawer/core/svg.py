"""Rasterize SVG files into premultiplied RGBA buffers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from PySide6.QtCore import QByteArray, QRectF, Qt
from PySide6.QtGui import QImage, QPainter
from PySide6.QtSvg import QSvgRenderer


class SvgError(Exception):
    """Raised when an SVG document cannot be parsed or rendered."""


@dataclass
class RasterizedSvg:
    data: bytes
    width: int


class SvgRasterizer:
    """Renders SVG documents into square RGBA8 premultiplied pixel buffers.

    The drawing keeps its aspect ratio and is centered inside the square.
    """

    def rasterize(self, path: str | Path, size: int) -> RasterizedSvg:
        """Render ``path`` at ``size`` x ``size`` pixels.

        Raises OSError when the file cannot be read and SvgError when the
        document is invalid.
        """
        if size <= 0:
            raise SvgError(f"invalid target size {size}")
        source = Path(path).read_bytes()
        return self.rasterize_bytes(source, size)

    def rasterize_bytes(self, source: bytes, size: int) -> RasterizedSvg:
        renderer = QSvgRenderer(QByteArray(source))
        if not renderer.isValid():
            raise SvgError("invalid SVG document")
        renderer.setAspectRatioMode(Qt.AspectRatioMode.KeepAspectRatio)

        image = QImage(size, size, QImage.Format.Format_RGBA8888_Premultiplied)
        if image.isNull():
            raise SvgError(f"could not allocate {size}x{size} image")
        image.fill(Qt.GlobalColor.transparent)

        painter = QPainter(image)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
            renderer.render(painter, QRectF(0, 0, size, size))
        finally:
            painter.end()

        # 32-bit rows are never padded, so the buffer is exactly size*size*4.
        data = bytes(image.constBits())[: size * size * 4]
        return RasterizedSvg(data=data, width=size)
